# Base exception class
from .base import DynamoDBAdapterError

# Adapter-raised exceptions
from .domain_exceptions import (
    BatchRetryExceededError,
    ConnectionError,
    EmptyKeysError,
    ItemNotFoundError,
    TooManyItemsError,
    ValidationError,
)

__all__ = [
    # Base exception
    "DynamoDBAdapterError",

    # Adapter exceptions (alphabetically ordered)
    "BatchRetryExceededError",
    "ConnectionError",
    "EmptyKeysError",
    "ItemNotFoundError",
    "TooManyItemsError",
    "ValidationError",
]
