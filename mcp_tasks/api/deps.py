"""
API Dependencies

FastAPI dependency factories for the API layer. Every collaborator a route
needs is built here so tests can swap it through app.dependency_overrides.

Pattern: Centralized dependency injection following FastAPI conventions.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request

from mcp_tasks.core.config import Settings, get_settings as _get_settings
from mcp_tasks.core.exceptions import ConfigurationError
from mcp_tasks.providers.base import LLMProvider
from mcp_tasks.providers.openai import OpenAIProvider
from mcp_tasks.services.chat import ChatOrchestrator
from mcp_tasks.tasks.store import TaskStore
from mcp_tasks.tools.dispatcher import ToolDispatcher
from mcp_tasks.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# Settings
# =============================================================================


def get_settings(request: Request) -> Settings:
    """
    Application settings.

    Uses the settings the app was created with, falling back to the cached
    singleton from core.config.
    """
    settings = getattr(request.app.state, "settings", None)
    return settings or _get_settings()


# =============================================================================
# Manifest / Tools
# =============================================================================


@lru_cache
def _load_registry(manifest_path: str) -> ToolRegistry:
    return ToolRegistry.from_file(manifest_path)


def get_registry(settings: Settings = Depends(get_settings)) -> ToolRegistry:
    """
    The tool registry, loaded once per manifest path.

    Raises:
        ManifestLoadError: If the manifest cannot be read or validated.
    """
    return _load_registry(settings.manifest_path)


def get_task_store(settings: Settings = Depends(get_settings)) -> TaskStore:
    """Task store bound to the configured JSON file."""
    return TaskStore(settings.tasks_file)


def get_dispatcher(store: TaskStore = Depends(get_task_store)) -> ToolDispatcher:
    return ToolDispatcher(store)


# =============================================================================
# Model Provider / Chat
# =============================================================================


@lru_cache
def _openai_provider(
    api_key: str, model: str, base_url: Optional[str]
) -> OpenAIProvider:
    return OpenAIProvider(api_key=api_key, model=model, base_url=base_url)


def get_provider(settings: Settings = Depends(get_settings)) -> LLMProvider:
    """
    The OpenAI provider for the configured credential.

    Raises:
        ConfigurationError: If no API key is configured.
    """
    if not settings.has_model_credential:
        raise ConfigurationError(
            "OpenAI API key is not configured", setting="openai_api_key"
        )
    return _openai_provider(
        settings.openai_api_key.get_secret_value(),
        settings.openai_model,
        settings.openai_base_url,
    )


def get_chat_orchestrator(
    settings: Settings = Depends(get_settings),
    provider: LLMProvider = Depends(get_provider),
    registry: ToolRegistry = Depends(get_registry),
    dispatcher: ToolDispatcher = Depends(get_dispatcher),
) -> ChatOrchestrator:
    """Chat orchestrator wired to the configured collaborators."""
    return ChatOrchestrator(
        provider=provider,
        registry=registry,
        dispatcher=dispatcher,
        timeout_ms=settings.completion_timeout_ms,
        system_prompt=settings.system_prompt,
    )


def clear_caches() -> None:
    """Drop cached registries and providers (settings changes, tests)."""
    _load_registry.cache_clear()
    _openai_provider.cache_clear()


__all__ = [
    "clear_caches",
    "get_chat_orchestrator",
    "get_dispatcher",
    "get_provider",
    "get_registry",
    "get_settings",
    "get_task_store",
]
