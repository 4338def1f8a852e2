"""
Adapter Exceptions

Errors raised locally by the adapter, before or after a backend call.
Anything the DynamoDB service rejects surfaces as the botocore
``ClientError`` it was raised as.

Organized by category:
1. Argument Validation Errors
2. Item Lookup Errors
3. Infrastructure Errors
"""

from typing import Any, Dict, Optional

from .base import DynamoDBAdapterError


# =============================================================================
# Argument Validation Errors
# =============================================================================

class ValidationError(DynamoDBAdapterError):
    """Raised when arguments or items cannot be used as given.

    Used for:
    - Malformed key conditions (e.g. BETWEEN without two bounds)
    - Items that fail conversion into the caller's pydantic model
    - Entity classes without usable table metadata
    """

    def __init__(self, message: str, errors: Optional[Dict[str, Any]] = None, original_error: Optional[Exception] = None):
        """Initialize validation error.

        Args:
            message: Human-readable error message
            errors: Dictionary of field-level validation errors
            original_error: The original exception that caused this error
        """
        self.errors = errors or {}
        context = {}
        if self.errors:
            context['validation_errors'] = self.errors
        super().__init__(message, original_error, context)


class EmptyKeysError(ValidationError):
    """Raised when a batch read is requested with no keys."""

    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__("key empty", errors={'table_name': table_name})


# =============================================================================
# Item Lookup Errors
# =============================================================================

class ItemNotFoundError(DynamoDBAdapterError):
    """Raised when a single-item read matches nothing."""

    def __init__(self, table_name: str, key: dict, original_error: Optional[Exception] = None):
        """Initialize item not found error.

        Args:
            table_name: Name of the DynamoDB table
            key: The key that was not found
            original_error: The original exception that caused this error
        """
        self.table_name = table_name
        self.key = key
        message = f"Item not found in table '{table_name}'"
        context = {
            'table_name': table_name,
            'key': key
        }
        super().__init__(message, original_error, context)


class TooManyItemsError(DynamoDBAdapterError):
    """Raised when a single-item read matches more than one item."""

    def __init__(self, table_name: str, key: dict):
        self.table_name = table_name
        self.key = key
        super().__init__(
            f"More than one item in table '{table_name}' matches the key",
            context={'table_name': table_name, 'key': key}
        )


# =============================================================================
# Infrastructure Errors
# =============================================================================

class ConnectionError(DynamoDBAdapterError):
    """Raised when the DynamoDB resource cannot be built.

    Used for:
    - Invalid session or credential configuration
    - Invalid endpoint configurations
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        """Initialize connection error.

        Args:
            message: Human-readable error message
            original_error: The original exception that caused this error
            context: Additional context information (e.g., endpoint, region)
        """
        super().__init__(message, original_error, context)


class BatchRetryExceededError(DynamoDBAdapterError):
    """Raised when a batch read still has unprocessed keys after the last retry."""

    def __init__(self, table_name: str, unprocessed_count: int, attempts: int):
        self.table_name = table_name
        self.unprocessed_count = unprocessed_count
        self.attempts = attempts
        super().__init__(
            f"BatchGet on '{table_name}': retry limit exceeded",
            context={'unprocessed': unprocessed_count, 'attempts': attempts}
        )
