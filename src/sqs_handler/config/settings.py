"""
Module: settings.py
Description: Handler configuration using pydantic-settings.

Loads default handler settings from ``SQS_``-prefixed environment
variables with validation and defaults. Supports .env files for local
development.
"""

from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Handler settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SQS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    # Client settings
    version: str = Field(default="2012-11-05", description="SQS API version")
    region: Optional[str] = Field(default=None, description="AWS region")
    endpoint: Optional[str] = Field(
        default=None,
        description="Default destination queue URL"
    )
    service_url: Optional[str] = Field(
        default=None,
        description="Override of the SQS service endpoint (local emulators)"
    )
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Connect/read timeout in seconds for SQS requests"
    )

    # Credentials; left unset to use the default boto3 credential chain
    access_key_id: Optional[str] = Field(default=None, description="AWS access key id")
    secret_access_key: Optional[SecretStr] = Field(default=None, description="AWS secret access key")
    session_token: Optional[SecretStr] = Field(default=None, description="AWS session token")

    async_workers: int = Field(
        default=4,
        ge=1,
        le=64,
        description="Thread pool size for fire-and-forget operations"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


# Global settings instance
settings = Settings()
