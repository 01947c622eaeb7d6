"""
Fake LLM Provider - Test Double Implementation

This module provides a FakeProvider that implements the real LLMProvider
interface without making network calls. Responses are scripted: each call to
complete() takes the next entry from a queue.

This is NOT mocking - it's a proper implementation of the interface for
testing only. With no API key configured the chat relay answers 503 rather
than falling back to this provider.
"""

import asyncio
import json
import uuid
from collections import deque
from typing import Any, Iterable, Optional, Union

from mcp_tasks.models.domain import Message
from mcp_tasks.providers.base import LLMProvider

ScriptedResponse = Union[Message, Exception]


def make_tool_call(
    name: str, arguments: Union[dict[str, Any], str, None] = None, call_id: Optional[str] = None
) -> dict[str, Any]:
    """
    Build a tool call in the OpenAI wire shape.

    `arguments` may be a dict (JSON-encoded here), a raw string (passed
    through, so malformed JSON can be scripted), or None (empty string).
    """
    if isinstance(arguments, dict):
        raw = json.dumps(arguments)
    else:
        raw = arguments or ""
    return {
        "id": call_id or f"call_{uuid.uuid4().hex[:12]}",
        "type": "function",
        "function": {"name": name, "arguments": raw},
    }


class FakeProvider(LLMProvider):
    """
    Fake chat completion provider for testing and local development.

    Pattern: FakeRepository

    Attributes:
        responses: Remaining scripted responses, consumed in order.
        response_content: Content returned once the script is exhausted.
        delay_seconds: Artificial latency applied to every call.
        complete_calls: Recorded (messages, tools) pairs for assertions.

    Example:
        >>> provider = FakeProvider(responses=[
        ...     Message(role="assistant", tool_calls=[make_tool_call("list-tasks")]),
        ...     Message(role="assistant", content="You have no tasks."),
        ... ])
        >>> reply = await provider.complete(messages, tools)
    """

    name = "fake"

    def __init__(
        self,
        responses: Optional[Iterable[ScriptedResponse]] = None,
        response_content: str = "Fake response for testing",
        delay_seconds: float = 0.0,
    ) -> None:
        self.responses: deque[ScriptedResponse] = deque(responses or [])
        self.response_content = response_content
        self.delay_seconds = delay_seconds

        # Track calls for test assertions
        self.complete_calls: list[tuple[list[Message], Optional[list[dict[str, Any]]]]] = []

    @property
    def call_count(self) -> int:
        return len(self.complete_calls)

    def enqueue(self, *responses: ScriptedResponse) -> None:
        self.responses.extend(responses)

    async def complete(
        self,
        messages: list[Message],
        tools: Optional[list[dict[str, Any]]] = None,
    ) -> Message:
        """
        Return (or raise) the next scripted response.

        Raises:
            Exception: When the scripted entry is an exception instance.
        """
        self.complete_calls.append(([m.model_copy() for m in messages], tools))

        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        if not self.responses:
            return Message(role="assistant", content=self.response_content)

        response = self.responses.popleft()
        if isinstance(response, Exception):
            raise response
        return response
