"""Application configuration via pydantic-settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ARCRUD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database
    database_url: str = "sqlite:///./arcrud.db"
    echo_sql: bool = False

    # Paging: upper bound applied to Page.size by the session (0 disables)
    max_page_size: int = Field(default=500, ge=0)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["console", "json"] = "console"
