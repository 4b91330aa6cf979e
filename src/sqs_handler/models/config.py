"""
Module: config.py
Description: Immutable handler configuration and client construction.

A HandlerConfig is never mutated: QueueHandler setters derive a new
value with ``with_changes()`` and hand it to a client factory, so a
client always reflects one complete configuration snapshot.

Key Components:
- Credentials: Static AWS key pair with optional session token
- HandlerConfig: Frozen configuration value
- build_client(): Default factory producing a boto3 SQS client

Dependencies: pydantic, boto3, botocore
Author: SQS Handler Team
"""

from typing import Any, Optional

import boto3
from botocore.config import Config
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_API_VERSION = "2012-11-05"


class Credentials(BaseModel):
    """Static AWS credentials."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="AWS access key id")
    secret: SecretStr = Field(..., description="AWS secret access key")
    token: Optional[SecretStr] = Field(default=None, description="AWS session token")

    @field_validator('secret')
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("secret must be a non-empty string")
        return v


class HandlerConfig(BaseModel):
    """
    Configuration snapshot for one SQS client.

    Attributes:
        version: SQS API version passed to boto3
        credentials: Static credentials, or None for the default chain
        region: AWS region name
        endpoint: Default destination queue URL
        timeout: Connect/read timeout in seconds
        service_url: Override of the SQS service endpoint
    """

    model_config = ConfigDict(frozen=True)

    version: str = Field(default=DEFAULT_API_VERSION, min_length=1)
    credentials: Optional[Credentials] = None
    region: Optional[str] = None
    endpoint: Optional[str] = None
    timeout: Optional[float] = Field(default=None, gt=0)
    service_url: Optional[str] = None

    def with_changes(self, **changes: Any) -> 'HandlerConfig':
        """
        Derive a new configuration, keeping untouched fields.

        Goes through full validation, unlike model_copy(update=...).
        """
        return type(self).model_validate({**self.model_dump(), **changes})


def build_client(config: HandlerConfig):
    """
    Create a boto3 SQS client for a configuration snapshot.

    Retries stay with botocore's default retry handler.

    Args:
        config: Configuration to build the client from

    Returns:
        boto3 SQS client
    """
    kwargs = {
        "api_version": config.version,
        "region_name": config.region,
        "endpoint_url": config.service_url,
    }

    if config.credentials is not None:
        kwargs["aws_access_key_id"] = config.credentials.key
        kwargs["aws_secret_access_key"] = config.credentials.secret.get_secret_value()
        kwargs["aws_session_token"] = (
            config.credentials.token.get_secret_value()
            if config.credentials.token is not None else None
        )

    if config.timeout is not None:
        kwargs["config"] = Config(
            connect_timeout=config.timeout,
            read_timeout=config.timeout
        )

    return boto3.client("sqs", **kwargs)
