"""
Package: config
Description: Environment-backed settings for the SQS handler.
"""

from .settings import Settings, settings

__all__ = ["Settings", "settings"]
