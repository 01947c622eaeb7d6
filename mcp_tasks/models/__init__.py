"""
Models Package

Domain models plus request/response bodies for the HTTP API.
"""

from mcp_tasks.models.domain import (
    Manifest,
    Message,
    Task,
    ToolCallRequest,
    ToolDescriptor,
)
from mcp_tasks.models.requests import ChatRequest, ToolInput
from mcp_tasks.models.responses import (
    ChatResponse,
    ErrorResponse,
    TaskListResponse,
)

__all__ = [
    # Domain
    "Manifest",
    "Message",
    "Task",
    "ToolCallRequest",
    "ToolDescriptor",
    # Requests
    "ChatRequest",
    "ToolInput",
    # Responses
    "ChatResponse",
    "ErrorResponse",
    "TaskListResponse",
]
