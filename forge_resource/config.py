"""Configuration settings for forge_resource.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the FORGE_RES_ prefix.
    Per-resource options (target path, build command, staging) live in the
    resource configuration, not here.
    """

    model_config = SettingsConfigDict(
        env_prefix="FORGE_RES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths
    tmp_dir: Path | None = Field(
        default=None,
        description="Root for scratch staging directories (uses system default if not set)",
    )

    # Operational
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    # Build execution
    build_timeout: int | None = Field(
        default=None,
        ge=1,
        description="Timeout for build commands in seconds (no timeout if not set)",
    )
    shell: str | None = Field(
        default=None,
        description="Shell executable for build commands (uses /bin/sh if not set)",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
