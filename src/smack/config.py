"""Configuration management for Smack."""

import logging
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # Server Settings
    server_host: str = Field(default="0.0.0.0", description="Server host")
    server_port: int = Field(default=8096, description="Server port")
    route_prefix: str = Field(
        default="/Smack", description="Path prefix for the plugin API routes"
    )

    # Configuration storage
    database_url: str = Field(
        default="sqlite+aiosqlite:///./smack.db",
        description="Database URL for the remote server configuration",
    )

    # Outbound transport
    remote_timeout: float = Field(
        default=30.0, description="Timeout in seconds for calls to remote servers"
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")


# Global settings instance
settings = Settings()


def setup_logging(level: str = None) -> None:
    """
    Configure logging with a consistent format across the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               If None, uses the level from settings.
    """
    log_level = level or settings.log_level

    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=log_format,
        force=True,  # Override any existing configuration
    )

    # Request lines from httpx would carry the api_key query parameter
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
