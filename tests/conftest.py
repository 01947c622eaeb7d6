"""
Pytest configuration and shared fixtures.

This configuration sets up:
- Project root on sys.path
- Test markers for categorization
- Task store / registry / dispatcher fixtures over a temporary JSON file
- FakeProvider test double and a FastAPI TestClient wired through
  app.dependency_overrides
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to Python path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mcp_tasks.api import deps  # noqa: E402
from mcp_tasks.core.config import DEFAULT_MANIFEST_PATH, Settings, get_settings  # noqa: E402
from mcp_tasks.main import create_app  # noqa: E402
from mcp_tasks.providers.fake import FakeProvider  # noqa: E402
from mcp_tasks.tasks.store import TaskStore  # noqa: E402
from mcp_tasks.tools.dispatcher import ToolDispatcher  # noqa: E402
from mcp_tasks.tools.registry import ToolRegistry  # noqa: E402


# =============================================================================
# Test Markers
# =============================================================================


def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for service interactions")


# =============================================================================
# Cache Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def clear_cached_singletons():
    """Each test sees fresh settings and freshly loaded registries."""
    get_settings.cache_clear()
    deps.clear_caches()
    yield
    get_settings.cache_clear()
    deps.clear_caches()


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    """Location of a not-yet-created task file."""
    return tmp_path / "tasks.json"


@pytest.fixture
def task_store(tasks_file: Path) -> TaskStore:
    return TaskStore(tasks_file)


@pytest.fixture
def registry() -> ToolRegistry:
    """Registry over the packaged manifest."""
    return ToolRegistry.from_file(DEFAULT_MANIFEST_PATH)


@pytest.fixture
def dispatcher(task_store: TaskStore) -> ToolDispatcher:
    return ToolDispatcher(task_store)


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture
def test_settings(tasks_file: Path) -> Settings:
    """Settings with a test credential and a temporary task file."""
    return Settings(
        openai_api_key="sk-test",
        tasks_file=str(tasks_file),
        completion_timeout_ms=1000,
    )


@pytest.fixture
def app(test_settings: Settings, fake_provider: FakeProvider):
    """Application whose model provider is the FakeProvider."""
    application = create_app(test_settings)
    application.dependency_overrides[deps.get_provider] = lambda: fake_provider
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
