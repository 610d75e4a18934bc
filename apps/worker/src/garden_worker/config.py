"""Worker configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Worker settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = "postgresql+asyncpg://localhost/gardenbred"

    # Growth scheduler
    tick_interval_seconds: float = 2.0

    # Logging
    log_level: str = "info"


settings = Settings()
