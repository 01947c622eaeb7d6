"""
Services Package - Chat Orchestration
"""

from mcp_tasks.services.chat import ChatOrchestrator, ChatTurnResult

__all__ = [
    "ChatOrchestrator",
    "ChatTurnResult",
]
