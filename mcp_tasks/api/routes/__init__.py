"""
API Routes Package
"""

from mcp_tasks.api.routes.chat import router as chat_router
from mcp_tasks.api.routes.health import router as health_router
from mcp_tasks.api.routes.manifest import router as manifest_router
from mcp_tasks.api.routes.resources import router as resources_router
from mcp_tasks.api.routes.tools import router as tools_router

__all__ = [
    "chat_router",
    "health_router",
    "manifest_router",
    "resources_router",
    "tools_router",
]
