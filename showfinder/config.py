"""Configuration management using pydantic-settings.

All environment variables are loaded and validated here.
TVmaze is a public API, so nothing here is secret.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field has a default, so the package imports without a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # TVmaze API
    tvmaze_base_url: str = Field(
        default="https://api.tvmaze.com",
        description="Base URL of the TVmaze API (https only)",
    )

    request_timeout: float = Field(
        default=15.0,
        description="Transport timeout in seconds for a single request",
        gt=0,
    )

    # Images used by the presentation layer
    placeholder_image: str = Field(
        default="./images/tv-missing.png",
        description="Image shown for shows without artwork",
    )

    error_image: str = Field(
        default="./images/VectorStock.com-18175384.jpg",
        description="Image shown on error cards",
    )

    # Application Configuration
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    environment: str = Field(
        default="development",
        description="Environment name (development, production)",
    )

    @field_validator("tvmaze_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require HTTPS and drop a trailing slash."""
        if not v.startswith("https://"):
            raise ValueError("tvmaze_base_url must use https://")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v_upper

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is development or production."""
        allowed = {"development", "production"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v_lower

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"

    def get_safe_dict(self) -> dict[str, str | float | None]:
        """Get configuration as a plain dict for startup logging."""
        return {field_name: getattr(self, field_name) for field_name in type(self).model_fields}


# Global settings instance
settings = Settings()
