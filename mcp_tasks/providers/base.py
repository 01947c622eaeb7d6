"""
Provider Base Interface - Abstract Chat Completion Port

This module defines the abstract base class for model provider adapters.
The orchestration loop talks only to this interface, so the OpenAI adapter
and the in-process fake are interchangeable.

Design Pattern:
- Ports and Adapters (Hexagonal Architecture)
- LLMProvider serves as the "port" (interface)
- OpenAIProvider and FakeProvider serve as "adapters"
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from mcp_tasks.models.domain import Message


class LLMProvider(ABC):
    """
    Abstract base class for chat completion providers.

    Pattern: ABC for interface contracts

    Attributes:
        name: Provider identifier used in errors and logs.

    Example:
        >>> class EchoProvider(LLMProvider):
        ...     name = "echo"
        ...     async def complete(self, messages, tools=None):
        ...         return Message(role="assistant", content=messages[-1].content)
    """

    name: str = "provider"

    @abstractmethod
    async def complete(
        self,
        messages: list[Message],
        tools: Optional[list[dict[str, Any]]] = None,
    ) -> Message:
        """
        Request one chat completion.

        Args:
            messages: The transcript to send, in order.
            tools: Function schemas the model may call. None or empty means
                the model is offered no tools.

        Returns:
            The assistant message, possibly carrying tool_calls in the OpenAI
            wire shape.

        Raises:
            ProviderError: On transport or upstream failure.
        """
        ...
