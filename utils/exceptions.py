"""
Custom exception classes for Lambda handlers and services.
"""
from typing import Optional, Dict, Any


class StoreUnavailableError(Exception):
    """Exception raised when DynamoDB rejects or fails a request."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        operation: Optional[str] = None,
        table_name: Optional[str] = None
    ):
        """
        Initialize store error.

        Args:
            message: Error message
            code: DynamoDB error code if available (e.g. 'ValidationException')
            operation: Store operation name if available
            table_name: Table name if available
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.operation = operation
        self.table_name = table_name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": type(self).__name__,
            "message": self.message,
            "code": self.code,
            "operation": self.operation,
            "table_name": self.table_name,
        }


class ValidationError(Exception):
    """Exception raised for malformed requests."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        """
        Initialize validation error.

        Args:
            message: Error message, returned verbatim as the response body
            field: Field name that failed validation if available
            value: Invalid value if available
        """
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value


class ItemNotFoundError(Exception):
    """Exception raised when a requested item does not exist."""

    def __init__(self, message: str, item_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.item_id = item_id


class SweepIncompleteError(Exception):
    """Raised when a sweep stops at its page limit with items left."""

    def __init__(self, message: str, pages_scanned: int = 0):
        super().__init__(message)
        self.message = message
        self.pages_scanned = pages_scanned


def serialize_error(error: BaseException) -> Dict[str, Any]:
    """Render an exception as a JSON-friendly dict for a response body."""
    to_dict = getattr(error, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"type": type(error).__name__, "message": str(error)}
