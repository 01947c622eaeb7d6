"""
OpenAI Provider - Chat Completions Adapter

This module implements the LLMProvider port on top of the official openai
SDK. Requests and responses are already in the OpenAI wire shape, so the
adapter only serializes the transcript, forwards the function schemas, and
maps the first choice back into a Message.

SDK-level retries are disabled: the orchestration loop issues each completion
exactly once under its own deadline.

Design Patterns:
- Ports and Adapters: OpenAIProvider implements LLMProvider interface
- Adapter Pattern: Transforms OpenAI SDK responses to our Message model
"""

import logging
from typing import Any, Optional

import openai
from openai import AsyncOpenAI

from mcp_tasks.core.exceptions import ProviderError
from mcp_tasks.models.domain import Message
from mcp_tasks.providers.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAIProvider(LLMProvider):
    """
    OpenAI chat completions adapter.

    Args:
        api_key: OpenAI API key.
        model: Model identifier sent with every request.
        base_url: Optional custom endpoint URL (proxies, compatible servers).
        client: Optional pre-built AsyncOpenAI client (used by tests).

    Example:
        >>> provider = OpenAIProvider(api_key="sk-...")
        >>> reply = await provider.complete([Message(role="user", content="hi")])
        >>> print(reply.content)
    """

    name = "openai"

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._model = model

        if client is not None:
            self._client = client
        else:
            client_kwargs: dict[str, Any] = {"api_key": api_key, "max_retries": 0}
            if base_url:
                client_kwargs["base_url"] = base_url
            self._client = AsyncOpenAI(**client_kwargs)

    @property
    def model(self) -> str:
        return self._model

    async def complete(
        self,
        messages: list[Message],
        tools: Optional[list[dict[str, Any]]] = None,
    ) -> Message:
        """
        Send the transcript and return the first choice's message.

        Raises:
            ProviderError: On any SDK failure. status_code carries the HTTP
                status when the upstream returned one.
        """
        kwargs: dict[str, Any] = {
            "model": self._model,
            "messages": [message.to_wire() for message in messages],
        }
        if tools:
            kwargs["tools"] = tools

        try:
            response = await self._client.chat.completions.create(**kwargs)
        except openai.APIStatusError as e:
            logger.error(f"OpenAI returned status {e.status_code}: {e.message}")
            raise ProviderError(
                str(e.message), provider=self.name, status_code=e.status_code
            ) from e
        except openai.OpenAIError as e:
            logger.error(f"OpenAI request failed: {e}")
            raise ProviderError(str(e), provider=self.name) from e

        return self._transform_response(response)

    def _transform_response(self, response: Any) -> Message:
        """Map the first choice of an SDK response to a Message."""
        if not response.choices:
            raise ProviderError("OpenAI response contained no choices", provider=self.name)

        choice = response.choices[0].message
        tool_calls = None
        if choice.tool_calls:
            tool_calls = [self._transform_tool_call(call) for call in choice.tool_calls]

        return Message(role="assistant", content=choice.content, tool_calls=tool_calls)

    @staticmethod
    def _transform_tool_call(call: Any) -> dict[str, Any]:
        return {
            "id": call.id,
            "type": "function",
            "function": {
                "name": call.function.name,
                "arguments": call.function.arguments,
            },
        }
