"""
Response Models

Pydantic models for API response serialization.
"""

from pydantic import BaseModel, Field

from mcp_tasks.models.domain import Message, Task


class ChatResponse(BaseModel):
    """
    Chat relay response model.

    Attributes:
        message: The final assistant message of the turn.
        messages: The full transcript after the turn.
    """

    message: Message = Field(..., description="Final assistant message")
    messages: list[Message] = Field(..., description="Updated transcript")


class ErrorResponse(BaseModel):
    """Error body returned by the chat relay and on persistence faults."""

    error: str = Field(..., description="Error message")


class TaskListResponse(BaseModel):
    """Body of GET /tools/list-tasks."""

    tasks: list[Task] = Field(default_factory=list)
