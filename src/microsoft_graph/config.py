"""
Configuration management for the Graph client.

Supports configuration via environment variables and .env files.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GraphConfig(BaseSettings):
    """
    Configuration settings for the Graph client.

    All settings can be configured via environment variables with the GRAPH_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # API settings
    token: Optional[str] = Field(
        default=None,
        description="Default bearer token for Graph calls"
    )
    version: str = Field(
        default="1.0",
        description="Graph API version (the v1.0 in /v1.0/me)"
    )
    host: str = Field(
        default="https://graph.microsoft.com",
        description="Graph API host"
    )

    # Batching parameters
    batch_size: int = Field(
        default=20,
        ge=1,
        description="Maximum number of requests in a single $batch call"
    )

    # Transport settings
    timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="HTTP timeout for each request"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format"
    )


# Global config instance
_config: Optional[GraphConfig] = None


def get_config() -> GraphConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = GraphConfig()
    return _config


def set_config(config: Optional[GraphConfig]) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
