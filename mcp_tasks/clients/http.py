"""
HTTP Client Module - Client Factory and Task Manager API Client

This module provides the httpx client factory used by the CLI, plus a small
async client for the service's own HTTP API (manifest discovery, tool calls,
chat turns).

Pattern: Factory pattern for creating configured HTTP clients
"""

from typing import Any, Optional

import httpx

from mcp_tasks import __version__
from mcp_tasks.models.domain import Manifest
from mcp_tasks.tools.registry import accepts_input, lookup


# =============================================================================
# Custom Exceptions
# =============================================================================


class HTTPClientError(Exception):
    """Raised when the server answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# =============================================================================
# Default Configuration Constants
# =============================================================================


DEFAULT_TIMEOUT_SECONDS: float = 30.0
"""Default timeout for HTTP requests in seconds.

Covers a full chat turn, which may include two completion calls.
"""

DEFAULT_MAX_CONNECTIONS: int = 10

DEFAULT_MAX_KEEPALIVE: int = 5

DEFAULT_RETRY_COUNT: int = 1
"""Connection-level retries only; requests are never replayed."""


# =============================================================================
# HTTP Client Factory
# =============================================================================


def create_http_client(
    base_url: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
    max_connections: Optional[int] = None,
    max_keepalive: Optional[int] = None,
    retries: Optional[int] = None,
    headers: Optional[dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create a configured HTTP client with connection pooling and timeouts.

    Args:
        base_url: Base URL for all requests (e.g., "http://localhost:3000")
        timeout_seconds: Request timeout in seconds (default: 30.0)
        max_connections: Maximum connections in pool (default: 10)
        max_keepalive: Maximum keepalive connections (default: 5)
        retries: Connection retries (default: 1)
        headers: Additional headers to include in all requests
        transport: Explicit transport (e.g. httpx.MockTransport in tests);
            overrides the pooling and retry settings.

    Returns:
        httpx.AsyncClient: Configured async HTTP client

    Example:
        >>> client = create_http_client(base_url="http://localhost:3000")
        >>> async with client:
        ...     response = await client.get("/mcp/manifest")
    """
    timeout = timeout_seconds if timeout_seconds is not None else DEFAULT_TIMEOUT_SECONDS
    max_conn = max_connections if max_connections is not None else DEFAULT_MAX_CONNECTIONS
    max_keep = max_keepalive if max_keepalive is not None else DEFAULT_MAX_KEEPALIVE
    retry_count = retries if retries is not None else DEFAULT_RETRY_COUNT

    default_headers = {
        "User-Agent": f"mcp-task-manager/{__version__}",
        "Accept": "application/json",
    }
    if headers:
        default_headers.update(headers)

    if transport is None:
        transport = httpx.AsyncHTTPTransport(
            retries=retry_count,
            limits=httpx.Limits(
                max_connections=max_conn,
                max_keepalive_connections=max_keep,
            ),
        )

    return httpx.AsyncClient(
        base_url=base_url or "",
        timeout=httpx.Timeout(timeout),
        headers=default_headers,
        transport=transport,
    )


# =============================================================================
# Task Manager API Client
# =============================================================================


class TaskManagerClient:
    """
    Async client for the MCP Task Manager HTTP API.

    Tools are called the way an external MCP client would: tools whose
    manifest entry takes no input are fetched with GET, all others are
    POSTed a JSON body.

    Example:
        >>> async with TaskManagerClient("http://localhost:3000") as client:
        ...     manifest = await client.get_manifest()
        ...     created = await client.call_tool("create-task", {"title": "Demo"})
    """

    def __init__(
        self, base_url: str, http_client: Optional[httpx.AsyncClient] = None
    ) -> None:
        self._client = http_client or create_http_client(base_url=base_url)
        self._manifest: Optional[Manifest] = None

    async def __aenter__(self) -> "TaskManagerClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = await self._client.request(method, path, **kwargs)
        if response.is_error:
            raise HTTPClientError(
                f"{method} {path} failed with {response.status_code}: {response.text}",
                status_code=response.status_code,
            )
        return response.json()

    async def get_manifest(self) -> dict[str, Any]:
        """Fetch the manifest document and remember it for tool calls."""
        document = await self._request("GET", "/mcp/manifest")
        self._manifest = Manifest.model_validate(document)
        return document

    async def call_tool(
        self, tool_name: str, arguments: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Call a tool endpoint.

        Raises:
            HTTPClientError: If the server rejects the call.
        """
        if self._manifest is None:
            await self.get_manifest()

        path = f"/tools/{tool_name}"
        if accepts_input(lookup(self._manifest, tool_name)):
            return await self._request("POST", path, json=arguments or {})
        return await self._request("GET", path)

    async def chat(
        self, message: str, messages: Optional[list[dict[str, Any]]] = None
    ) -> dict[str, Any]:
        """Run one chat turn; returns {"message": ..., "messages": [...]}."""
        return await self._request(
            "POST", "/chat", json={"message": message, "messages": messages or []}
        )
