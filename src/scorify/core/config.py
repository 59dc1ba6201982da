"""Application settings.

Loaded from environment variables prefixed with SCORIFY_ (or a local .env).
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the Scorify API."""

    environment: str = "dev"

    # Storage
    database_path: Path = Path("data/scorify.db")

    # Token verification (tokens are issued by the external auth service).
    # Required: SCORIFY_JWT_SECRET must be set, there is no fallback secret.
    jwt_secret: str
    jwt_algorithm: str = "HS256"

    # Comma-separated list of allowed UI origins
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    log_level: str = "INFO"

    # Server
    api_host: str = "127.0.0.1"
    api_port: int = 8000
    api_reload: bool = False

    model_config = SettingsConfigDict(
        env_prefix="SCORIFY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def cors_origin_list(self) -> list[str]:
        """Split cors_origins into a clean list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
