"""sqs-handler - Reconfigurable AWS SQS handler with validated messages."""

__version__ = "0.1.0"

from sqs_handler.config.settings import settings
from sqs_handler.utils.logger import configure_logging

configure_logging(settings.log_level)

from sqs_handler.handlers.queue_handler import QueueHandler, SendMode  # noqa: E402
from sqs_handler.models import (  # noqa: E402
    Credentials,
    HandlerConfig,
    Message,
    MessageAttributeValue,
    OperationResult,
)

__all__ = [
    "QueueHandler",
    "SendMode",
    "Credentials",
    "HandlerConfig",
    "Message",
    "MessageAttributeValue",
    "OperationResult",
    "settings",
    "__version__",
]
