"""
Module: models
Description: Package initialization for pydantic data models.

This package contains all data models used by the SQS handler:
- Message: Outbound message with scenario-based validation
- MessageAttributeValue: Typed custom message attribute
- HandlerConfig / Credentials: Immutable client configuration
- OperationResult: Outcome of one SQS API call
"""

from .config import Credentials, HandlerConfig, build_client
from .message import Message, MessageAttributeValue, SCENARIO_BATCH, SCENARIO_SINGLE
from .result import OperationResult

__all__ = [
    "Credentials",
    "HandlerConfig",
    "build_client",
    "Message",
    "MessageAttributeValue",
    "SCENARIO_BATCH",
    "SCENARIO_SINGLE",
    "OperationResult",
]
