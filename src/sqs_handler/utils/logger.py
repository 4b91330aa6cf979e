"""
Module: logger.py
Description: Structured logging configuration for the SQS handler.

Configures structlog for JSON output suitable for CloudWatch Logs.
Every record emitted by the handler carries a ``category`` field so
queue traffic can be filtered out of mixed application logs.

Key Components:
- JSON output with ISO 8601 UTC timestamps and log levels
- Level filtering driven by Settings.log_level
- get_logger() helper function

Dependencies: structlog, logging
Author: SQS Handler Team
"""

import logging

import structlog

LOG_CATEGORY = "sqs"


def configure_logging(log_level: str = "INFO", force: bool = False) -> None:
    """
    Configure structlog for JSON output.

    Leaves an existing structlog configuration of the host application
    alone unless ``force`` is set.

    Args:
        log_level: Minimum level name to emit (DEBUG, INFO, ...)
        force: Reconfigure even if structlog is already configured
    """
    if structlog.is_configured() and not force:
        return

    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.WriteLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str, category: str = LOG_CATEGORY):
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)
        category: Value of the ``category`` field on every record

    Returns:
        Lazy structlog logger with ``category`` pre-bound

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Sent to SQS", operation="SendMessageBatch", count=12)
        {"category": "sqs", "operation": "SendMessageBatch", "count": 12, "event": "Sent to SQS", ...}
    """
    return structlog.get_logger(name, category=category)
