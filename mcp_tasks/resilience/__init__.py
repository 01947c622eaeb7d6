"""
Resilience Package - Deadlines for Outbound Calls
"""

from mcp_tasks.resilience.deadline import (
    DeadlineOutcome,
    run_with_deadline,
    timeout_message,
)

__all__ = [
    "DeadlineOutcome",
    "run_with_deadline",
    "timeout_message",
]
