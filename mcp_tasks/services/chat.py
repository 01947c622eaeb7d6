"""
Chat Service - One-Level Tool-Calling Orchestration

This module runs a single chat turn: it forwards the transcript to the model
provider with the manifest's function schemas, dispatches any tool calls the
model emits against the task store, and asks the model once more for a final
answer that can use the tool results.

The loop is exactly one level deep. Tool calls contained in the follow-up
response are returned as part of the final assistant message and are not
dispatched.

States:
    AwaitingFirstCompletion -> Done
    AwaitingFirstCompletion -> ToolCallsReceived -> Dispatching
        -> AwaitingFollowupCompletion -> Done

Pattern: Service Layer (orchestrates domain operations)
Pattern: Dependency Injection (provider, registry, dispatcher)
Pattern: Command Executor (tool calls as commands)
"""

import json
import logging
from dataclasses import dataclass
from typing import Optional

from mcp_tasks.core.config import DEFAULT_SYSTEM_PROMPT
from mcp_tasks.core.exceptions import ToolArgumentsError
from mcp_tasks.models.domain import Message, ToolCallRequest
from mcp_tasks.providers.base import LLMProvider
from mcp_tasks.resilience.deadline import run_with_deadline
from mcp_tasks.tools.dispatcher import ToolDispatcher
from mcp_tasks.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

DEFAULT_COMPLETION_TIMEOUT_MS = 5000

FIRST_COMPLETION_LABEL = "OpenAI request"
FOLLOWUP_COMPLETION_LABEL = "OpenAI follow-up request"


@dataclass
class ChatTurnResult:
    """
    Outcome of one chat turn.

    Attributes:
        message: The final assistant message.
        messages: The full updated transcript, ending with `message`.
    """

    message: Message
    messages: list[Message]


class ChatOrchestrator:
    """
    Runs one chat turn with at most one round of tool dispatch.

    The caller's transcript is never mutated: the turn works on a copy, so a
    failed turn leaves the caller's history untouched.

    Attributes:
        _provider: Chat completion provider.
        _registry: Tool registry holding the manifest.
        _dispatcher: Tool dispatcher bound to the task store.
        _timeout_ms: Deadline applied to each completion call.
        _system_prompt: Prompt inserted when the transcript has none.

    Example:
        >>> orchestrator = ChatOrchestrator(
        ...     provider=provider,
        ...     registry=registry,
        ...     dispatcher=dispatcher,
        ... )
        >>> result = await orchestrator.run_turn("Add a task: buy milk", [])
        >>> print(result.message.content)
    """

    def __init__(
        self,
        provider: LLMProvider,
        registry: ToolRegistry,
        dispatcher: ToolDispatcher,
        timeout_ms: int = DEFAULT_COMPLETION_TIMEOUT_MS,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._provider = provider
        self._registry = registry
        self._dispatcher = dispatcher
        self._timeout_ms = timeout_ms
        self._system_prompt = system_prompt

    async def run_turn(
        self, message: str, messages: Optional[list[Message]] = None
    ) -> ChatTurnResult:
        """
        Run one chat turn.

        Args:
            message: The new user message.
            messages: The transcript so far (owned by the caller).

        Returns:
            ChatTurnResult with the final assistant message and the updated
            transcript.

        Raises:
            CompletionTimeoutError: If either completion misses the deadline.
            ProviderError: If the provider call fails.
            ToolArgumentsError: If a tool call carries malformed JSON.
            TaskStoreError: If the task store is unusable.
        """
        transcript = self._prepare_transcript(message, messages or [])

        # AwaitingFirstCompletion
        tools = self._registry.translate()
        logger.info(
            f"Requesting completion ({len(transcript)} messages, {len(tools)} tools)"
        )
        outcome = await run_with_deadline(
            self._provider.complete(transcript, tools),
            self._timeout_ms,
            FIRST_COMPLETION_LABEL,
        )
        reply: Message = outcome.unwrap()
        transcript.append(reply)

        if not reply.tool_calls:
            logger.info("Turn done without tool calls")
            return ChatTurnResult(message=reply, messages=transcript)

        # ToolCallsReceived -> Dispatching
        for tool_call in reply.tool_calls:
            transcript.append(self._dispatch(ToolCallRequest.from_openai_format(tool_call)))

        # AwaitingFollowupCompletion
        logger.info(f"Requesting follow-up completion after {len(reply.tool_calls)} tool calls")
        outcome = await run_with_deadline(
            self._provider.complete(transcript),
            self._timeout_ms,
            FOLLOWUP_COMPLETION_LABEL,
        )
        final: Message = outcome.unwrap()
        transcript.append(final)

        logger.info("Turn done after follow-up")
        return ChatTurnResult(message=final, messages=transcript)

    def _prepare_transcript(self, message: str, messages: list[Message]) -> list[Message]:
        """Copy the transcript, ensure a system prompt, append the user message."""
        transcript = [m.model_copy(deep=True) for m in messages]

        if not any(m.role == "system" for m in transcript):
            transcript.insert(0, Message(role="system", content=self._system_prompt))

        last = transcript[-1]
        if not (last.role == "user" and last.content == message):
            transcript.append(Message(role="user", content=message))

        return transcript

    def _dispatch(self, request: ToolCallRequest) -> Message:
        """
        Run one tool call and wrap its result in a tool message.

        Raises:
            ToolArgumentsError: If the raw arguments are not a JSON object.
        """
        try:
            arguments = request.parse_arguments()
        except ValueError as e:
            # json.JSONDecodeError is a ValueError
            logger.error(f"Malformed arguments for tool {request.tool_name}: {e}")
            raise ToolArgumentsError(
                f"Invalid arguments for tool {request.tool_name}: {e}",
                tool_name=request.tool_name,
                call_id=request.call_id,
            ) from e

        logger.info(f"Dispatching tool {request.tool_name} (call {request.call_id})")
        result = self._dispatcher.dispatch(request.tool_name, arguments)

        return Message(
            role="tool",
            tool_call_id=request.call_id,
            content=json.dumps(result),
        )
