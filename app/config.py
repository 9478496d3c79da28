# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DATABASE_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only JWT_SECRET_KEY is required; everything else has a development default.
    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    JWT_SECRET_KEY: str = Field(
        ...,
        min_length=16,
        description="Secret used to sign and verify bearer tokens"
    )

    JWT_ALGORITHM: str = Field(
        default="HS256",
        description="JWT signing algorithm"
    )

    ACCESS_TOKEN_EXPIRE_HOURS: int = Field(
        default=24,
        ge=1,
        description="Lifetime of issued tokens. Tokens are never refreshed."
    )

    PASSWORD_HASH_ITERATIONS: int = Field(
        default=310_000,
        ge=1_000,
        description="PBKDF2 iterations used for new password hashes"
    )

    # -------------------------------------------------------------------------
    # Database
    # -------------------------------------------------------------------------

    DATABASE_URL: str = Field(
        default="sqlite:///data/places.db",
        description="SQLAlchemy database URL"
    )

    # -------------------------------------------------------------------------
    # Geocoding
    # -------------------------------------------------------------------------

    GOOGLE_API_KEY: str = Field(
        default="",
        description="Google Geocoding API key"
    )

    GEOCODING_URL: str = Field(
        default="https://maps.googleapis.com/maps/api/geocode/json",
        description="Geocoding endpoint (Google Geocoding API compatible)"
    )

    GEOCODING_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout for geocoding requests"
    )

    # -------------------------------------------------------------------------
    # Image Uploads
    # -------------------------------------------------------------------------

    UPLOAD_DIR: str = Field(
        default="uploads/images",
        description="Directory where uploaded images are stored"
    )

    MAX_IMAGE_SIZE_BYTES: int = Field(
        default=500_000,
        ge=1,
        description="Maximum accepted image size in bytes"
    )

    ALLOWED_IMAGE_TYPES: str = Field(
        default="image/png,image/jpg,image/jpeg",
        description="Accepted image MIME types (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=5000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list, e.g. "a, b" -> ["a", "b"]."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_image_types_list(self) -> list[str]:
        return [t.strip().lower() for t in self.ALLOWED_IMAGE_TYPES.split(",") if t.strip()]

    @property
    def token_lifetime_seconds(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_HOURS * 60 * 60

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
