"""
Module: utils
Description: Package initialization for utility functions.

Current utilities:
- logger: Structured logging configuration and helpers
- batch_helpers: List chunking for the SQS batch APIs
"""

__all__ = []
