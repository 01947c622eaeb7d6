"""
Deadline Helper - Bounded Awaitables for Outbound Completion Calls

This module races an awaitable against a fixed deadline and reports the
result as a two-branch outcome instead of letting asyncio.TimeoutError leak
into the caller.

On timeout the awaited coroutine is cancelled locally. The upstream provider
is not otherwise signalled, so a late response is simply discarded.

Pattern: Timeout (bounded wait on a remote call)
Pattern: Result type with explicit success / timed-out branches
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Generic, Optional, TypeVar

from mcp_tasks.core.exceptions import CompletionTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def timeout_message(label: str, timeout_ms: int) -> str:
    """Format the timeout message, e.g. "OpenAI request timed out after 5000ms"."""
    return f"{label} timed out after {timeout_ms}ms"


@dataclass(frozen=True)
class DeadlineOutcome(Generic[T]):
    """
    Result of run_with_deadline().

    Exactly one branch is populated: `value` when the awaitable finished in
    time, or `timed_out=True` with `message` when the deadline fired first.

    Attributes:
        value: Result of the awaitable (success branch).
        timed_out: True when the deadline was exceeded.
        message: Timeout message (timed-out branch).
        timeout_ms: The deadline that applied.
    """

    value: Optional[T] = None
    timed_out: bool = False
    message: Optional[str] = None
    timeout_ms: int = 0

    @classmethod
    def completed(cls, value: T, timeout_ms: int) -> "DeadlineOutcome[T]":
        return cls(value=value, timeout_ms=timeout_ms)

    @classmethod
    def expired(cls, label: str, timeout_ms: int) -> "DeadlineOutcome[T]":
        return cls(
            timed_out=True,
            message=timeout_message(label, timeout_ms),
            timeout_ms=timeout_ms,
        )

    def unwrap(self) -> T:
        """
        Return the value, or raise for the timed-out branch.

        Raises:
            CompletionTimeoutError: If the deadline was exceeded.
        """
        if self.timed_out:
            raise CompletionTimeoutError(
                self.message or "Request timed out", timeout_ms=self.timeout_ms
            )
        return self.value  # type: ignore[return-value]


async def run_with_deadline(
    awaitable: Awaitable[Any], timeout_ms: int, label: str
) -> DeadlineOutcome[Any]:
    """
    Await `awaitable` for at most `timeout_ms` milliseconds.

    Exceptions raised by the awaitable itself propagate unchanged; only the
    deadline is converted into an outcome.

    Args:
        awaitable: The coroutine or future to bound.
        timeout_ms: Deadline in milliseconds.
        label: Human-readable name used in the timeout message.

    Returns:
        DeadlineOutcome with either the value or the timed-out branch.

    Example:
        >>> outcome = await run_with_deadline(provider.complete(msgs), 5000, "OpenAI request")
        >>> message = outcome.unwrap()
    """
    try:
        value = await asyncio.wait_for(awaitable, timeout=timeout_ms / 1000)
    except asyncio.TimeoutError:
        logger.warning(timeout_message(label, timeout_ms))
        return DeadlineOutcome.expired(label, timeout_ms)
    return DeadlineOutcome.completed(value, timeout_ms)
