"""
Tests for mcp_tasks/api/deps.py - FastAPI dependency factories.
"""

from types import SimpleNamespace

import pytest

from mcp_tasks.api import deps
from mcp_tasks.core.config import Settings
from mcp_tasks.core.exceptions import ConfigurationError
from mcp_tasks.providers.openai import OpenAIProvider
from mcp_tasks.services.chat import ChatOrchestrator
from mcp_tasks.tasks.store import TaskStore
from mcp_tasks.tools.dispatcher import ToolDispatcher


def _request_for(settings):
    """Minimal stand-in for a Request whose app carries settings."""
    return SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace(settings=settings)))


class TestGetSettings:
    def test_prefers_app_state(self, test_settings):
        assert deps.get_settings(_request_for(test_settings)) is test_settings

    def test_falls_back_to_singleton(self):
        request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))

        assert isinstance(deps.get_settings(request), Settings)


class TestRegistry:
    def test_registry_is_cached_per_path(self, test_settings):
        assert deps.get_registry(test_settings) is deps.get_registry(test_settings)

    def test_clear_caches_reloads(self, test_settings):
        first = deps.get_registry(test_settings)
        deps.clear_caches()

        assert deps.get_registry(test_settings) is not first


class TestStoreAndDispatcher:
    def test_store_uses_configured_file(self, test_settings, tasks_file):
        store = deps.get_task_store(test_settings)

        assert isinstance(store, TaskStore)
        assert store.path == tasks_file

    def test_dispatcher_wraps_store(self, task_store):
        assert isinstance(deps.get_dispatcher(task_store), ToolDispatcher)


class TestProvider:
    def test_missing_key_raises_configuration_error(self, tasks_file):
        settings = Settings(openai_api_key="", tasks_file=str(tasks_file))

        with pytest.raises(ConfigurationError) as exc_info:
            deps.get_provider(settings)

        assert exc_info.value.setting == "openai_api_key"

    def test_builds_openai_provider(self, test_settings):
        provider = deps.get_provider(test_settings)

        assert isinstance(provider, OpenAIProvider)
        assert provider.model == test_settings.openai_model
        assert deps.get_provider(test_settings) is provider


class TestChatOrchestrator:
    def test_wires_collaborators(self, test_settings, fake_provider, registry, dispatcher):
        orchestrator = deps.get_chat_orchestrator(
            settings=test_settings,
            provider=fake_provider,
            registry=registry,
            dispatcher=dispatcher,
        )

        assert isinstance(orchestrator, ChatOrchestrator)
        assert orchestrator._timeout_ms == test_settings.completion_timeout_ms
        assert orchestrator._system_prompt == test_settings.system_prompt
