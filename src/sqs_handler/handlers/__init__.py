"""
Module: handlers
Description: Package initialization for SQS handlers.

- queue_handler: QueueHandler facade and SendMode selector
"""

from .queue_handler import QueueHandler, SendMode

__all__ = ["QueueHandler", "SendMode"]
