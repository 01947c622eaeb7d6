"""
Clients Package - HTTP access to the Task Manager API
"""

from mcp_tasks.clients.http import (
    HTTPClientError,
    TaskManagerClient,
    create_http_client,
)

__all__ = [
    "HTTPClientError",
    "TaskManagerClient",
    "create_http_client",
]
