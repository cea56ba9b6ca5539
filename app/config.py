"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="Asia/Kolkata",
        description="IANA timezone name (or UTC offset) used for timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    store_base_url: str = Field(
        default="http://localhost:3000",
        description="Public storefront URL used to build links inside notifications",
    )

    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )

    push_enabled: bool = Field(
        default=True,
        description="Whether push notifications are sent through Firebase Cloud Messaging",
    )
    firebase_credentials_path: str | None = Field(
        default=None,
        description="Path to a Firebase service account JSON file; ADC is used when empty",
    )
    firebase_project_id: str | None = Field(
        default=None, description="Firebase project identifier"
    )

    notification_timeout_seconds: float = Field(
        default=10.0,
        description="Upper bound for a single provider call before it is aborted",
        gt=0,
    )
    push_suppress_after_no_token_failures: int | None = Field(
        default=None,
        description=(
            "Skip push for a user whose last N push attempts all failed with "
            "'no_tokens'. Unset disables suppression."
        ),
        ge=1,
    )
    push_prune_invalid_tokens: bool = Field(
        default=False,
        description="Delete device tokens the push provider reports as unregistered",
    )
    admin_notification_concurrency: int = Field(
        default=5,
        description="Maximum number of admin notifications dispatched at the same time",
        ge=1,
    )

    razorpay_key_secret: str | None = Field(
        default=None, description="Razorpay key secret used to verify payment signatures"
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
