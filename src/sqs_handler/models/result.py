"""
Module: result.py
Description: Outcome of one SQS transport call.

QueueHandler converts every boto3 response or exception into an
OperationResult before mapping it to a public return value, so
botocore exception types stop at the handler boundary.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class OperationResult(BaseModel):
    """
    Result of a single SQS API call.

    Attributes:
        ok: True when the call returned HTTP 200
        operation: SQS operation name, e.g. 'SendMessageBatch'
        payload: Response dictionary (empty on failure)
        status_code: HTTP status code, when a response was received
        error_code: AWS error code, exception class name or 'HTTP<status>'
        error_message: Human-readable failure description
    """

    ok: bool
    operation: str
    payload: Dict[str, Any] = Field(default_factory=dict)
    status_code: Optional[int] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, operation: str, payload: Dict[str, Any]) -> 'OperationResult':
        return cls(ok=True, operation=operation, payload=payload, status_code=200)

    @classmethod
    def failure(
        cls,
        operation: str,
        error_code: str,
        error_message: str,
        status_code: Optional[int] = None
    ) -> 'OperationResult':
        return cls(
            ok=False,
            operation=operation,
            status_code=status_code,
            error_code=error_code,
            error_message=error_message
        )
