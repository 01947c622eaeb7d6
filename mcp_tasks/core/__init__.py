"""
Core module for the MCP Task Manager.

This module contains configuration and the exception hierarchy.
"""

from mcp_tasks.core.config import Settings, get_settings
from mcp_tasks.core.exceptions import (
    CompletionTimeoutError,
    ConfigurationError,
    ErrorCode,
    ManifestLoadError,
    ProviderError,
    TaskGatewayException,
    TaskStoreError,
    ToolArgumentsError,
)

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Exceptions
    "ErrorCode",
    "TaskGatewayException",
    "ConfigurationError",
    "ProviderError",
    "CompletionTimeoutError",
    "ToolArgumentsError",
    "TaskStoreError",
    "ManifestLoadError",
]
