from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Central configuration.

    - Values loaded from the environment (prefix ``USER_RIGHTS_``) or `.env`
    - Log levels are split so list output stays clean while modify modes
      report every grant and revoke
    """

    # ----------------------------
    # Logging
    # ----------------------------
    log_level: str = "WARNING"
    modify_log_level: str = "INFO"

    # ----------------------------
    # Policy store
    # ----------------------------
    default_system_name: str | None = None  # None targets the local host

    # ----------------------------
    # Revoke pattern
    # ----------------------------
    pattern_timeout_seconds: float = Field(default=1.0, gt=0)

    model_config = SettingsConfigDict(
        env_prefix="USER_RIGHTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
