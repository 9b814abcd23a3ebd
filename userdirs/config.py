from __future__ import annotations
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed handles (safe as a single path segment)
ALLOWED_HANDLE_PATTERN = r"^[a-zA-Z0-9._-]+$"


class Settings(BaseSettings):
    """Settings read from USERDIRS_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="USERDIRS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Base storage: <data_root>/<handle>/...
    data_root: str = "./data"
    default_handle: str = "default-user"
    # mkdir of every user directory at startup
    create_directories: bool = False

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]  # narrow down in prod


@lru_cache
def get_settings() -> Settings:
    return Settings()
