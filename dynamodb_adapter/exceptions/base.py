from typing import Any, Dict, Optional


class DynamoDBAdapterError(Exception):
    """Root of the errors the adapter raises on its own.

    ``context`` identifies the failing call (table name, key, region and so
    on); entries whose value is ``None`` are dropped. Backend errors (botocore
    ``ClientError``) are not wrapped in this hierarchy and reach the caller
    unchanged.

    Attributes:
        message: Human-readable error message
        original_error: Exception that triggered this one, if any
        context: Details of the call that failed
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None, context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.original_error = original_error
        self.context = {key: value for key, value in (context or {}).items() if value is not None}
        super().__init__(message)

    def __str__(self) -> str:
        """Message, then ``[key=value, ...]`` context, then the triggering error type."""
        parts = [self.message]
        if self.context:
            parts.append("[" + ", ".join(f"{key}={value!r}" for key, value in self.context.items()) + "]")
        if self.original_error is not None:
            parts.append(f"(caused by {type(self.original_error).__name__})")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, context={self.context!r})"
