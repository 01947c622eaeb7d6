"""
Tests for mcp_tasks/providers/openai.py - OpenAI chat completions adapter.

The SDK client is replaced with a MagicMock; no network calls are made.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from mcp_tasks.core.exceptions import ProviderError
from mcp_tasks.models.domain import Message
from mcp_tasks.providers.base import LLMProvider
from mcp_tasks.providers.openai import DEFAULT_MODEL, OpenAIProvider

COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"


def _sdk_response(content=None, tool_calls=None, choices=True):
    """Build an object shaped like openai's ChatCompletion."""
    if not choices:
        return SimpleNamespace(choices=[])
    message = SimpleNamespace(content=content, tool_calls=tool_calls)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _sdk_tool_call(call_id, name, arguments):
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


@pytest.fixture
def sdk_client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=_sdk_response(content="Hello!"))
    return client


@pytest.fixture
def provider(sdk_client):
    return OpenAIProvider(api_key="sk-test", client=sdk_client)


class TestOpenAIProviderClass:
    def test_implements_llm_provider(self):
        assert issubclass(OpenAIProvider, LLMProvider)

    def test_default_model(self, provider):
        assert provider.model == DEFAULT_MODEL
        assert provider.name == "openai"

    def test_sdk_retries_are_disabled(self):
        """Each completion is issued exactly once."""
        provider = OpenAIProvider(api_key="sk-test")

        assert provider._client.max_retries == 0

    def test_custom_base_url(self):
        provider = OpenAIProvider(api_key="sk-test", base_url="https://proxy.local/v1")

        assert str(provider._client.base_url).startswith("https://proxy.local/v1")


class TestComplete:
    @pytest.mark.asyncio
    async def test_sends_model_and_wire_messages(self, provider, sdk_client):
        messages = [
            Message(role="system", content="sys"),
            Message(role="user", content="hi"),
        ]

        await provider.complete(messages)

        kwargs = sdk_client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == DEFAULT_MODEL
        assert kwargs["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "hi"},
        ]

    @pytest.mark.asyncio
    async def test_tools_forwarded_only_when_present(self, provider, sdk_client):
        tools = [{"type": "function", "function": {"name": "list-tasks"}}]

        await provider.complete([Message(role="user", content="hi")], tools)
        assert sdk_client.chat.completions.create.call_args.kwargs["tools"] == tools

        await provider.complete([Message(role="user", content="hi")])
        assert "tools" not in sdk_client.chat.completions.create.call_args.kwargs

    @pytest.mark.asyncio
    async def test_returns_assistant_message(self, provider):
        reply = await provider.complete([Message(role="user", content="hi")])

        assert reply == Message(role="assistant", content="Hello!")

    @pytest.mark.asyncio
    async def test_tool_calls_are_mapped(self, provider, sdk_client):
        sdk_client.chat.completions.create.return_value = _sdk_response(
            tool_calls=[_sdk_tool_call("call_1", "create-task", '{"title": "x"}')]
        )

        reply = await provider.complete([Message(role="user", content="add x")])

        assert reply.content is None
        assert reply.tool_calls == [
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": "create-task", "arguments": '{"title": "x"}'},
            }
        ]

    @pytest.mark.asyncio
    async def test_empty_choices_raise(self, provider, sdk_client):
        sdk_client.chat.completions.create.return_value = _sdk_response(choices=False)

        with pytest.raises(ProviderError, match="no choices"):
            await provider.complete([Message(role="user", content="hi")])


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_status_error_keeps_status_code(self, provider, sdk_client):
        response = httpx.Response(429, request=httpx.Request("POST", COMPLETIONS_URL))
        sdk_client.chat.completions.create.side_effect = openai.RateLimitError(
            "Rate limit reached", response=response, body=None
        )

        with pytest.raises(ProviderError) as exc_info:
            await provider.complete([Message(role="user", content="hi")])

        assert exc_info.value.status_code == 429
        assert exc_info.value.provider == "openai"
        assert "Rate limit reached" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_connection_error_has_no_status(self, provider, sdk_client):
        sdk_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=httpx.Request("POST", COMPLETIONS_URL)
        )

        with pytest.raises(ProviderError) as exc_info:
            await provider.complete([Message(role="user", content="hi")])

        assert exc_info.value.status_code is None
