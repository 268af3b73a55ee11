"""Rendering configuration — env-driven.

Centralized settings using pydantic-settings for environment variable
support. Reads from a .env file and TERMSTACK_* environment variables.
"""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class RenderSettings(BaseSettings):
    """Rendering configuration with environment variable overrides.

    All settings can be overridden via TERMSTACK_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export TERMSTACK_FORCE_REDIRECTED=true
        export TERMSTACK_FALLBACK_WIDTH=80
        export TERMSTACK_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TERMSTACK_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Geometry used when the host output is not an interactive terminal
    fallback_width: int = 100
    fallback_height: int = 100
    force_redirected: bool = False

    # Render loop
    refresh_hz: float = 10.0

    # Observability
    log_level: str = "WARNING"

    # What a view does when its data source signals an error
    signal_errors: Literal["ignore", "log", "raise"] = "log"


# Module-level singleton, import as `from termstack.config import settings`
settings = RenderSettings()
