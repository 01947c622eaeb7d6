"""
Core configuration module for the MCP Task Manager.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the MCP_TASKS_ prefix,
optionally read from a local .env file.

Pattern: Pydantic BaseSettings with a cached singleton accessor
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings

# Manifest shipped alongside the package
DEFAULT_MANIFEST_PATH = str(Path(__file__).resolve().parent.parent / "manifest.json")

DEFAULT_SYSTEM_PROMPT = "You are an AI agent that can call MCP tools."


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the MCP_TASKS_ prefix for environment variables.
    Example: MCP_TASKS_PORT=3000

    The model credential additionally accepts the conventional
    OPENAI_API_KEY variable so existing .env files keep working.
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="mcp-task-manager",
        description="Name of the service for logging and identification",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface the service binds to",
    )
    port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port the service listens on",
    )
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ERROR)",
    )
    cors_origins: str = Field(
        default="",
        description="Comma-separated CORS origins for non-development environments",
    )

    # =========================================================================
    # Model Provider Configuration
    # Pattern: SecretStr masks values in logs/repr, use .get_secret_value()
    # =========================================================================
    openai_api_key: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("MCP_TASKS_OPENAI_API_KEY", "OPENAI_API_KEY"),
        description="OpenAI API key used by the chat relay",
    )
    openai_base_url: Optional[str] = Field(
        default=None,
        description="Optional OpenAI-compatible endpoint URL",
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for chat completions",
    )
    completion_timeout_ms: int = Field(
        default=5000,
        ge=1,
        description="Deadline in milliseconds for each outbound completion call",
    )
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        description="Instruction inserted when a transcript has no system message",
    )

    # =========================================================================
    # Storage and Manifest
    # =========================================================================
    tasks_file: str = Field(
        default="./tasks.json",
        description="Path of the JSON file holding the task list",
    )
    manifest_path: str = Field(
        default=DEFAULT_MANIFEST_PATH,
        description="Path of the static MCP manifest document",
    )

    # =========================================================================
    # CLI Client
    # =========================================================================
    server_url: str = Field(
        default="http://localhost:3000",
        description="Base URL the CLI chat and demo commands talk to",
    )

    model_config = {
        "env_prefix": "MCP_TASKS_",
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
        "populate_by_name": True,
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if level not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return level

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        """Validate the CLI target URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Server URL must start with http:// or https://")
        return v.rstrip("/")

    @property
    def has_model_credential(self) -> bool:
        """True when an OpenAI API key is configured."""
        return bool(self.openai_api_key.get_secret_value())


# =============================================================================
# Settings Singleton
# =============================================================================


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
