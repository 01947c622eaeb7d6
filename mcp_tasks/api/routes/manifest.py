"""
Manifest Router - MCP Discovery

GET /mcp/manifest serves the manifest document exactly as loaded.
"""

from typing import Any

from fastapi import APIRouter, Depends

from mcp_tasks.api.deps import get_registry
from mcp_tasks.tools.registry import ToolRegistry

router = APIRouter(prefix="/mcp", tags=["MCP"])


@router.get("/manifest")
async def get_manifest(
    registry: ToolRegistry = Depends(get_registry),
) -> dict[str, Any]:
    return registry.document
