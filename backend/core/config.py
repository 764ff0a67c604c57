"""Application settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from the environment or a local .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "FestMap API"
    app_version: str = "1.0.0"
    environment: Literal["development", "test", "production"] = "development"

    database_url: str = "sqlite+aiosqlite:///./festmap.db"
    database_echo: bool = False

    api_prefix: str = "/api/v1"
    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"

    seed_locations_on_startup: bool = True

    default_page_size: int = 20
    default_comment_page_size: int = 50
    max_page_size: int = 100

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


settings = Settings()
