"""Configuration settings for the Kalistheniks API."""

from pathlib import Path
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/kalistheniks/config.py
PACKAGE_ROOT = Path(__file__).parent  # src/kalistheniks/
PROJECT_ROOT = PACKAGE_ROOT.parent.parent

INSECURE_SECRETS = {"replace-me", "changeme", "secret"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Security headers (disable HSTS for local development without HTTPS)
    security_enable_hsts: bool = False

    # Token signing. The algorithm is fixed to HS256 in the token codec.
    jwt_secret_key: str
    jwt_issuer: str = "kalistheniks-api"
    jwt_audience: str = "kalistheniks-users"
    token_ttl_hours: int = 24

    # Reject tokens whose subject no longer has a user row
    auth_require_existing_user: bool = True

    # Database
    database_path: Path | None = None

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_secret(cls, value: str) -> str:
        if value.strip().lower() in INSECURE_SECRETS:
            raise ValueError("JWT_SECRET_KEY must not be a placeholder value")
        if len(value) < 32:
            raise ValueError("JWT_SECRET_KEY must be at least 32 characters")
        return value

    def model_post_init(self, __context) -> None:
        """Set default database path after initialization."""
        if self.database_path is None:
            self.database_path = PROJECT_ROOT / "kalistheniks.db"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
