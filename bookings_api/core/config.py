"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="bookings-api", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # API
    api_host: str = Field(default="0.0.0.0", alias="API_HOST")
    api_port: int = Field(default=8000, alias="API_PORT")
    api_key_prefix: str = Field(default="cal_", alias="API_KEY_PREFIX")

    # Database
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")
    postgres_db: str = Field(default="bookings", alias="POSTGRES_DB")
    postgres_user: str = Field(default="bookings_user", alias="POSTGRES_USER")
    postgres_password: str = Field(default="bookings_password", alias="POSTGRES_PASSWORD")
    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")

    @property
    def async_database_url(self) -> str:
        """Construct async database URL."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    # Localization
    default_locale: str = Field(default="en", alias="DEFAULT_LOCALE")

    # Webhooks
    webhook_user_agent: str = Field(default="Bookings-Webhook/1.0", alias="WEBHOOK_USER_AGENT")
    webhook_timeout: Optional[float] = Field(default=30.0, alias="WEBHOOK_TIMEOUT")

    @field_validator("webhook_timeout", mode="before")
    @classmethod
    def _parse_timeout(cls, value: object) -> object:
        # Empty keeps the default, zero disables the timeout
        if value is None or value == "":
            return 30.0
        if float(value) <= 0:  # type: ignore[arg-type]
            return None
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
