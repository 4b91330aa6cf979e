"""
Module: batch_helpers.py
Description: Utility functions for batch operations.

Key Components:
- chunk_list(): Split lists into smaller chunks
- SQS_MAX_BATCH_SIZE: Entry limit of the SQS batch APIs

Dependencies: typing
Author: SQS Handler Team
"""

from typing import List, TypeVar

T = TypeVar('T')

# SendMessageBatch / DeleteMessageBatch hard limit
SQS_MAX_BATCH_SIZE = 10


def chunk_list(items: List[T], chunk_size: int = SQS_MAX_BATCH_SIZE) -> List[List[T]]:
    """
    Split a list into ordered chunks of at most ``chunk_size`` items.

    Args:
        items: List to split into chunks
        chunk_size: Maximum size of each chunk

    Returns:
        List of chunks, where each chunk is a list of items

    Raises:
        ValueError: If items is not a list or chunk_size is not positive

    Example:
        >>> chunk_list([1, 2, 3, 4, 5], 2)
        [[1, 2], [3, 4], [5]]
    """
    if not isinstance(items, list):
        raise ValueError("items must be a list")
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    return [items[i:i + chunk_size] for i in range(0, len(items), chunk_size)]
