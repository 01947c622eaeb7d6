"""
MCP Task Manager - Main Application Entry Point

This module provides the FastAPI application: task tool endpoints, the MCP
manifest, a static resource, and the chat relay.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from mcp_tasks import __version__
from mcp_tasks.api.deps import get_registry
from mcp_tasks.api.errors import register_exception_handlers
from mcp_tasks.api.middleware.logging import RequestLoggingMiddleware
from mcp_tasks.api.routes import (
    chat_router,
    health_router,
    manifest_router,
    resources_router,
    tools_router,
)
from mcp_tasks.core.config import Settings, get_settings
from mcp_tasks.observability.logging import configure_logging, get_logger

# Application metadata
APP_NAME = "MCP Task Manager"
APP_DESCRIPTION = "Task tools, an MCP manifest, and a tool-calling chat relay"

LANDING_PAGE = """<!DOCTYPE html>
<html>
  <head><title>MCP Task Manager</title></head>
  <body>
    <p>MCP Server is running.</p>
    <ul>
      <li><a href="/mcp/manifest">/mcp/manifest</a></li>
      <li><a href="/tools/list-tasks">/tools/list-tasks</a></li>
      <li><a href="/resources/user-profile">/resources/user-profile</a></li>
      <li><a href="/health">/health</a></li>
    </ul>
  </body>
</html>
"""


def get_cors_origins(settings: Settings) -> list[str]:
    """
    Get CORS allowed origins based on environment.

    - Development: Allow all origins (["*"])
    - Staging/Production: MCP_TASKS_CORS_ORIGINS (comma-separated)
    - If not configured outside development: empty list
    """
    if settings.environment == "development":
        return ["*"]

    if settings.cors_origins:
        return [o.strip() for o in settings.cors_origins.split(",") if o.strip()]

    return []


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and load the manifest once (fails fast on a
    broken manifest). Shutdown: log and clear state.
    """
    settings: Settings = app.state.settings
    configure_logging(level=settings.log_level)
    log = get_logger(__name__).bind(service=settings.service_name)

    registry = get_registry(settings)
    app.state.initialized = True

    log.info(
        "startup",
        version=__version__,
        environment=settings.environment,
        tools=registry.names(),
        tasks_file=settings.tasks_file,
    )
    if not settings.has_model_credential:
        log.warning("no OpenAI API key configured, POST /chat will return 503")

    yield

    log.info("shutdown")
    app.state.initialized = False


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to get_settings()).

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=APP_NAME,
        description=APP_DESCRIPTION,
        version=__version__,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(manifest_router)
    app.include_router(tools_router)
    app.include_router(resources_router)
    app.include_router(chat_router)

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def root() -> str:
        """Landing page linking the main endpoints."""
        return LANDING_PAGE

    return app


app = create_app()
