"""
Domain Models - Tasks, Tool Descriptors, Messages and Tool Calls

This module contains the domain models shared by the task store, the tool
registry, the dispatcher and the chat orchestration loop.

Pattern: Domain models as value objects (frozen where immutable)
Pattern: Pydantic for validation at API boundaries

Note: Message and ToolCallRequest follow the OpenAI chat wire shape so that
transcripts round-trip through HTTP clients and the provider unchanged.
"""

import json
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Task Model
# =============================================================================


class Task(BaseModel):
    """
    A single entry of the task list.

    Attributes:
        id: Unique numeric identifier (millisecond timestamp at creation).
        title: Task title as provided by the caller.
        done: Whether the task has been completed.
    """

    id: int = Field(..., description="Unique task identifier")
    title: Any = Field(default=None, description="Task title")
    done: bool = Field(default=False, description="Completion flag")


# =============================================================================
# Tool Descriptor / Manifest Models
# =============================================================================


class ToolDescriptor(BaseModel):
    """
    Declarative description of one tool in the MCP manifest.

    A null or absent input schema means the tool accepts no structured input.

    Attributes:
        name: Unique tool name (e.g. "create-task").
        description: Human-readable description.
        input_schema: JSON Schema for the tool input, serialized as inputSchema.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Unique tool name")
    description: Optional[str] = Field(default=None, description="Tool description")
    input_schema: Optional[dict[str, Any]] = Field(
        default=None,
        alias="inputSchema",
        description="JSON Schema for tool input (null for no input)",
    )


class Manifest(BaseModel):
    """
    The static MCP manifest, loaded once at startup and never mutated.

    Attributes:
        name: Server name advertised to clients.
        version: Manifest version string.
        description: Optional server description.
        tools: Ordered tool descriptors; names are unique.
        resources: Optional resource descriptors, served verbatim.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None
    tools: tuple[ToolDescriptor, ...] = Field(default_factory=tuple)
    resources: tuple[dict[str, Any], ...] = Field(default_factory=tuple)

    @field_validator("tools")
    @classmethod
    def tool_names_unique(
        cls, v: tuple[ToolDescriptor, ...]
    ) -> tuple[ToolDescriptor, ...]:
        """Reject manifests that declare the same tool twice."""
        seen: set[str] = set()
        for tool in v:
            if tool.name in seen:
                raise ValueError(f"Duplicate tool name in manifest: {tool.name}")
            seen.add(tool.name)
        return v


# =============================================================================
# Conversation Models
# =============================================================================


class Message(BaseModel):
    """
    A message in a conversation transcript.

    Attributes:
        role: Message role (system, user, assistant, tool).
        content: Text content (None for assistant messages with only tool calls).
        name: Optional author name.
        tool_calls: Tool call requests emitted by the assistant (OpenAI shape).
        tool_call_id: ID of the call a tool message answers.
    """

    model_config = ConfigDict(extra="ignore")

    role: Literal["system", "user", "assistant", "tool"]
    content: Optional[str] = None
    name: Optional[str] = None
    tool_calls: Optional[list[dict[str, Any]]] = None
    tool_call_id: Optional[str] = None

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the provider wire format, omitting unset fields."""
        return self.model_dump(exclude_none=True)


class ToolCallRequest(BaseModel):
    """
    A model-emitted request to invoke one tool.

    Produced only by the model; never constructed by the orchestration loop
    other than by parsing an assistant message.

    Attributes:
        call_id: Identifier echoed back in the tool result message.
        tool_name: Name of the tool to dispatch.
        raw_arguments: JSON-encoded argument object as emitted by the model.
    """

    model_config = ConfigDict(frozen=True)

    call_id: str
    tool_name: str
    raw_arguments: Optional[str] = None

    @classmethod
    def from_openai_format(cls, tool_call: dict[str, Any]) -> "ToolCallRequest":
        """
        Parse a ToolCallRequest from OpenAI's tool_calls format.

        Args:
            tool_call: {"id": "call_xyz", "type": "function",
                        "function": {"name": "...", "arguments": "{...}"}}
        """
        function = tool_call.get("function") or {}
        return cls(
            call_id=tool_call.get("id") or "",
            tool_name=function.get("name") or "",
            raw_arguments=function.get("arguments"),
        )

    def parse_arguments(self) -> dict[str, Any]:
        """
        Decode the raw argument string.

        An empty or absent string yields an empty dict. Malformed JSON raises
        json.JSONDecodeError; a JSON value that is not an object raises
        ValueError.
        """
        if not self.raw_arguments:
            return {}
        arguments = json.loads(self.raw_arguments)
        if not isinstance(arguments, dict):
            raise ValueError(
                f"Tool arguments must be a JSON object, got {type(arguments).__name__}"
            )
        return arguments
