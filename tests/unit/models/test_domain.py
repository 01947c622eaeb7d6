"""
Tests for mcp_tasks/models - Domain, request and response models.
"""

import json

import pytest
from pydantic import ValidationError

from mcp_tasks.models.domain import (
    Manifest,
    Message,
    Task,
    ToolCallRequest,
    ToolDescriptor,
)
from mcp_tasks.models.requests import ChatRequest, ToolInput
from mcp_tasks.models.responses import ChatResponse, ErrorResponse


class TestTask:
    def test_defaults_to_open(self):
        task = Task(id=1, title="Buy milk")

        assert task.done is False

    def test_title_is_stored_as_given(self):
        """Titles are not coerced; a number stays a number."""
        assert Task(id=1, title=42).title == 42

    def test_requires_id(self):
        with pytest.raises(ValidationError):
            Task(title="no id")


class TestToolDescriptor:
    def test_accepts_input_schema_alias(self):
        descriptor = ToolDescriptor.model_validate(
            {"name": "create-task", "inputSchema": {"type": "object"}}
        )

        assert descriptor.input_schema == {"type": "object"}

    def test_accepts_field_name(self):
        descriptor = ToolDescriptor(name="list-tasks", input_schema=None)

        assert descriptor.input_schema is None

    def test_dumps_with_alias(self):
        descriptor = ToolDescriptor(name="t", input_schema={"type": "object"})

        assert "inputSchema" in descriptor.model_dump(by_alias=True)

    def test_is_frozen(self):
        descriptor = ToolDescriptor(name="t")

        with pytest.raises(ValidationError):
            descriptor.name = "other"


class TestManifest:
    def test_tools_keep_manifest_order(self):
        manifest = Manifest.model_validate(
            {"tools": [{"name": "b"}, {"name": "a"}, {"name": "c"}]}
        )

        assert [tool.name for tool in manifest.tools] == ["b", "a", "c"]

    def test_duplicate_tool_names_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate tool name"):
            Manifest.model_validate({"tools": [{"name": "a"}, {"name": "a"}]})

    def test_unknown_metadata_is_kept(self):
        manifest = Manifest.model_validate({"tools": [], "homepage": "http://x"})

        assert manifest.model_extra == {"homepage": "http://x"}

    def test_empty_manifest_is_valid(self):
        assert Manifest().tools == ()


class TestMessage:
    def test_to_wire_omits_unset_fields(self):
        assert Message(role="user", content="hi").to_wire() == {
            "role": "user",
            "content": "hi",
        }

    def test_tool_message_round_trip(self):
        message = Message(role="tool", tool_call_id="call_1", content='{"tasks": []}')

        assert Message.model_validate(message.to_wire()) == message

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            Message(role="narrator", content="hi")

    def test_unknown_keys_are_ignored(self):
        """Provider-specific keys such as refusal do not break parsing."""
        message = Message.model_validate(
            {"role": "assistant", "content": "ok", "refusal": None}
        )

        assert message.to_wire() == {"role": "assistant", "content": "ok"}


class TestToolCallRequest:
    def _call(self, arguments):
        return {
            "id": "call_1",
            "type": "function",
            "function": {"name": "create-task", "arguments": arguments},
        }

    def test_from_openai_format(self):
        request = ToolCallRequest.from_openai_format(self._call('{"title": "x"}'))

        assert request.call_id == "call_1"
        assert request.tool_name == "create-task"
        assert request.raw_arguments == '{"title": "x"}'

    def test_parse_arguments(self):
        request = ToolCallRequest.from_openai_format(self._call(json.dumps({"title": "x"})))

        assert request.parse_arguments() == {"title": "x"}

    @pytest.mark.parametrize("raw", ["", None])
    def test_empty_arguments_parse_to_empty_dict(self, raw):
        request = ToolCallRequest.from_openai_format(self._call(raw))

        assert request.parse_arguments() == {}

    def test_malformed_json_raises(self):
        request = ToolCallRequest.from_openai_format(self._call("{not json"))

        with pytest.raises(json.JSONDecodeError):
            request.parse_arguments()

    def test_non_object_json_raises_value_error(self):
        request = ToolCallRequest.from_openai_format(self._call("[1, 2]"))

        with pytest.raises(ValueError, match="JSON object"):
            request.parse_arguments()


class TestHttpBodies:
    def test_chat_request_defaults_to_empty_transcript(self):
        assert ChatRequest(message="hi").messages == []

    def test_chat_request_requires_message(self):
        with pytest.raises(ValidationError):
            ChatRequest(messages=[])

    def test_tool_input_keeps_arbitrary_keys(self):
        body = ToolInput.model_validate({"id": 5, "title": "x", "extra": True})

        assert body.as_arguments() == {"id": 5, "title": "x", "extra": True}

    def test_chat_response_shape(self):
        reply = Message(role="assistant", content="done")
        response = ChatResponse(message=reply, messages=[reply])

        assert response.model_dump(exclude_none=True) == {
            "message": {"role": "assistant", "content": "done"},
            "messages": [{"role": "assistant", "content": "done"}],
        }

    def test_error_response(self):
        assert ErrorResponse(error="boom").model_dump() == {"error": "boom"}
