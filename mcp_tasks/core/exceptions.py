"""
Custom exceptions for the MCP Task Manager.

This module provides a hierarchy of custom exceptions for the service.
All exceptions inherit from TaskGatewayException and include error codes for
consistent error handling and API responses.

Recoverable tool outcomes (unknown tool, missing identifier, no title match)
are NOT exceptions; they are structured {"success": False, "error": ...}
results produced by the dispatcher.
"""

from enum import Enum
from typing import Any, Optional


# =============================================================================
# Error Codes Enum
# =============================================================================


class ErrorCode(str, Enum):
    """
    Error codes for MCP Task Manager exceptions.

    These codes provide a consistent way to identify error types
    across the API and in logging.
    """

    GATEWAY_ERROR = "GATEWAY_ERROR"
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    PROVIDER_ERROR = "PROVIDER_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    TOOL_ARGUMENTS_ERROR = "TOOL_ARGUMENTS_ERROR"
    TASK_STORE_ERROR = "TASK_STORE_ERROR"
    MANIFEST_ERROR = "MANIFEST_ERROR"


# =============================================================================
# Base Exception
# =============================================================================


class TaskGatewayException(Exception):
    """
    Base exception for all MCP Task Manager errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code from ErrorCode enum.
    """

    def __init__(
        self,
        message: str,
        error_code: str = ErrorCode.GATEWAY_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Human-readable error message.
            error_code: Machine-readable error code.
            **kwargs: Additional attributes to set on the exception.
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code

        for key, value in kwargs.items():
            setattr(self, key, value)


# =============================================================================
# ConfigurationError
# =============================================================================


class ConfigurationError(TaskGatewayException):
    """
    Raised when required configuration is missing.

    The chat relay raises this before any outbound call when no model
    credential is configured; the API maps it to 503.

    Attributes:
        setting: Name of the missing setting (if known).
    """

    def __init__(
        self,
        message: str,
        setting: Optional[str] = None,
        error_code: str = ErrorCode.CONFIGURATION_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.setting = setting


# =============================================================================
# ProviderError
# =============================================================================


class ProviderError(TaskGatewayException):
    """
    Exception for model provider transport and upstream failures.

    Attributes:
        provider: Name of the provider (e.g., "openai").
        status_code: HTTP status code from the provider API (if applicable).
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        error_code: str = ErrorCode.PROVIDER_ERROR,
        **kwargs: Any,
    ) -> None:
        """
        Initialize the provider error.

        Args:
            message: Human-readable error message.
            provider: Name of the model provider.
            status_code: HTTP status code from provider (optional).
            error_code: Machine-readable error code.
            **kwargs: Additional attributes.
        """
        super().__init__(message, error_code, **kwargs)
        self.provider = provider
        self.status_code = status_code


class CompletionTimeoutError(ProviderError):
    """
    Raised when an outbound completion call misses its deadline.

    Message format: "<label> timed out after <N>ms".

    Attributes:
        timeout_ms: The deadline that was exceeded.
    """

    def __init__(
        self,
        message: str,
        timeout_ms: int,
        provider: str = "openai",
        error_code: str = ErrorCode.TIMEOUT_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, provider=provider, error_code=error_code, **kwargs)
        self.timeout_ms = timeout_ms


# =============================================================================
# ToolArgumentsError
# =============================================================================


class ToolArgumentsError(TaskGatewayException):
    """
    Raised when a model-emitted tool call carries unparseable JSON arguments.

    This is fatal to the chat turn; it is not folded into the transcript.

    Attributes:
        tool_name: Name of the requested tool.
        call_id: ID of the tool call (for correlation).
    """

    def __init__(
        self,
        message: str,
        tool_name: str,
        call_id: Optional[str] = None,
        error_code: str = ErrorCode.TOOL_ARGUMENTS_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.tool_name = tool_name
        self.call_id = call_id


# =============================================================================
# TaskStoreError
# =============================================================================


class TaskStoreError(TaskGatewayException):
    """
    Raised when the task store file cannot be read or written.

    Distinct from a recoverable dispatch outcome: the store itself is unusable.

    Attributes:
        path: Path of the task store file.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: str = ErrorCode.TASK_STORE_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.path = path


# =============================================================================
# ManifestLoadError
# =============================================================================


class ManifestLoadError(TaskGatewayException):
    """
    Raised when the MCP manifest file is missing or malformed.

    Attributes:
        path: Path of the manifest file.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: str = ErrorCode.MANIFEST_ERROR,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, error_code, **kwargs)
        self.path = path
