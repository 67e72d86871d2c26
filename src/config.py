"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite+aiosqlite:///./users.db"

    # Security
    jwt_secret: str = "change-this-in-production-minimum-32-characters-long"
    jwt_algorithm: str = "HS256"
    jwt_expiration_seconds: int = 3600
    bcrypt_rounds: int = 12

    # Login responses carry the stored hash unless this is switched on
    mask_password_on_login: bool = False

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_prefix: str = ""
    project_name: str = "User Service"
    version: str = "1.0.0"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
