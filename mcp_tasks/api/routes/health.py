"""
Health Router - Liveness Endpoint
"""

import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from mcp_tasks import __version__
from mcp_tasks.api.deps import get_registry
from mcp_tasks.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    tools: int


@router.get("/health", response_model=HealthResponse)
async def health(registry: ToolRegistry = Depends(get_registry)) -> HealthResponse:
    """
    Liveness check.

    Returns the service version and the number of tools in the manifest.
    """
    return HealthResponse(
        status="healthy", version=__version__, tools=len(registry.names())
    )
