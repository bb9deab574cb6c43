"""
Core configuration module for PxWeb MCP.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the PXWEB_MCP_ prefix,
and command-line flags override them (see pxweb_mcp.cli).

Pattern: Pydantic BaseSettings, cached singleton via lru_cache
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_API_BASE = "https://data.ssb.no/api/pxwebapi/v2"
DEFAULT_PORT = 3000
USER_AGENT = "pxweb-mcp/1.0"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All fields use the PXWEB_MCP_ prefix for environment variables.
    Example: PXWEB_MCP_PORT=8080
    """

    # =========================================================================
    # Service Configuration
    # =========================================================================
    service_name: str = Field(
        default="pxweb-mcp",
        description="Name of the service for logging and identification",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP listener binds to",
    )
    port: int = Field(
        default=DEFAULT_PORT,
        ge=1,
        le=65535,
        description="Port the service listens on",
    )

    # =========================================================================
    # Upstream PxWeb API
    # =========================================================================
    api_base_url: str = Field(
        default=DEFAULT_API_BASE,
        description="PxWeb v2 API base URL",
    )
    user_agent: str = Field(
        default=USER_AGENT,
        description="User-Agent header sent to the upstream API",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=600.0,
        description="Timeout in seconds for upstream requests",
    )

    # =========================================================================
    # MCP Transport
    # =========================================================================
    json_response: bool = Field(
        default=False,
        description="Answer MCP POST requests with plain JSON instead of an SSE stream",
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the HTTP endpoints from a browser",
    )

    # =========================================================================
    # Logging
    # =========================================================================
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "PXWEB_MCP_",
        "case_sensitive": False,
        "extra": "ignore",
    }

    # =========================================================================
    # Field Validators
    # =========================================================================
    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate the base URL scheme and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must start with http:// or https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {sorted(valid_levels)}")
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """
    Get the application settings singleton.

    Uses functools.lru_cache to ensure only one Settings instance is created.

    Returns:
        Settings: The application settings instance.
    """
    return Settings()
