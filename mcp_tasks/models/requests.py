"""
Request Models

Pydantic models for API request validation. Tool endpoint bodies are
deliberately permissive: handlers apply their own presence checks and report
problems as {"success": false, "error": ...} results rather than 422s.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from mcp_tasks.models.domain import Message


class ChatRequest(BaseModel):
    """
    Chat relay request model.

    Attributes:
        message: The new end-user message for this turn.
        messages: The transcript so far, owned by the caller.
    """

    message: str = Field(..., description="New user message")
    messages: list[Message] = Field(
        default_factory=list, description="Conversation transcript so far"
    )


class ToolInput(BaseModel):
    """
    Free-form tool input body.

    Any JSON object is accepted; the dispatcher decides which keys matter.
    """

    model_config = ConfigDict(extra="allow")

    def as_arguments(self) -> dict[str, Any]:
        """Return the body as a plain argument dict."""
        return dict(self.model_extra or {})
