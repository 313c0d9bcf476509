"""Application configuration.

Configuration is loaded from environment variables. For local use, you can provide a
`.env` file and set `OUTLINEGRID_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """outlinegrid settings.

    All fields are environment-configurable. Prefix is `OUTLINEGRID_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="OUTLINEGRID_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Ingestion polling
    poll_interval_s: float = Field(default=0.5, ge=0.0, le=60.0)
    poll_stable_checks: int = Field(default=3, ge=1, le=100)
    poll_max_checks: int = Field(default=120, ge=1, le=10000)

    # Extraction
    no_text_placeholder: str = Field(default="(no text)")
    no_parent_placeholder: str = Field(default="(no parent)")


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("OUTLINEGRID_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
