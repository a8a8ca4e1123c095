"""Application configuration using pydantic-settings."""
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Shared secret expected in "Authorization: Bearer <token>".
    # An empty token never authorizes a request.
    api_token: str = Field(default="", validation_alias="API_TOKEN")

    # "production" hides exception details in 500 responses
    environment: str = Field(default="development", validation_alias="ENVIRONMENT")

    # Backing store for bookmarks
    store_backend: Literal["memory", "database"] = Field(
        default="memory", validation_alias="STORE_BACKEND",
    )
    memory_seed: bool = Field(default=False, validation_alias="MEMORY_SEED")

    # Database (only used when store_backend == "database")
    database_url: str = Field(
        default="sqlite+aiosqlite:///./bookmarks.db",
        validation_alias="DATABASE_URL",
    )
    db_echo: bool = Field(default=False, validation_alias="DB_ECHO")
    db_create_schema: bool = Field(default=True, validation_alias="DB_CREATE_SCHEMA")

    # URL format checks are off until clients are ready for stricter input
    validate_urls: bool = Field(default=False, validation_alias="VALIDATE_URLS")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(default="*", validation_alias="CORS_ORIGINS")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # Server bind address for `bookmarks-api`
    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=8000, validation_alias="PORT")

    @property
    def is_production(self) -> bool:
        """True when running with ENVIRONMENT=production."""
        return self.environment.strip().lower() == "production"

    @property
    def expose_error_details(self) -> bool:
        """Whether 500 responses include the exception message."""
        return not self.is_production

    @property
    def cors_origins(self) -> list[str]:
        """Parse comma-separated CORS origins string into a list."""
        if not self.cors_origins_str:
            return []
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
