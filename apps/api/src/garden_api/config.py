"""Application configuration."""

import json

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: str = "postgresql+asyncpg://localhost/gardenbred"
    database_url_sync: str = "postgresql://localhost/gardenbred"

    session_expire_days: int = 7

    # Auth mode: "dev" uses X-User-Id header, "production" uses Bearer token
    auth_mode: str = "dev"

    # CORS configuration
    frontend_url: str = "http://localhost:5173"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Economy
    starting_coins: int = 10000
    market_page_size: int = 100

    # Class weight table (JSON file, re-read when modified)
    class_weights_path: str = "class_weights.json"
    class_weights_reload_seconds: float = 1.0

    # Gacha queue
    gacha_min_queue_length: int = 24
    gacha_queue_lookahead: int = 16
    gacha_preview_size: int = 11
    gacha_fresh_queue_size: int = 32
    gacha_pity_enabled: bool = True

    # Live updates
    live_push_interval_seconds: float = 3.0

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from string (JSON or comma-separated) or list."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
                if isinstance(parsed, list):
                    return parsed
            except json.JSONDecodeError:
                pass
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v


settings = Settings()
