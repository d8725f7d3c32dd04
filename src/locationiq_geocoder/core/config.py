"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

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

    # Geocoding — LocationIQ
    locationiq_api_key: str = Field(
        default="",
        description="LocationIQ access token (required for lookups)",
    )
    locationiq_base_url: str = Field(
        default="https://us1.locationiq.com/v1",
        description="LocationIQ API root (regional endpoint)",
    )
    locationiq_extra_tags: bool = Field(
        default=False,
        description="Request the extratags block on forward lookups",
    )
    locationiq_name_details: bool = Field(
        default=False,
        description="Request the namedetails block on forward lookups",
    )
    locationiq_timeout: float = Field(
        default=10.0,
        description="LocationIQ request timeout in seconds",
        gt=0,
    )
    locationiq_default_limit: int = Field(
        default=5,
        description="Default result limit for forward lookups",
        gt=0,
    )

    @field_validator("locationiq_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith("https://"):
            msg = "locationiq_base_url must use HTTPS"
            raise ValueError(msg)
        return v.rstrip("/")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_dir: str | None = Field(
        default=None,
        description="Directory for rotating log files (stderr only when unset)",
    )
    log_json: bool = Field(default=False, description="Emit stderr logs as JSON lines")


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
