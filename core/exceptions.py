"""Custom exception classes for the calorie tracker.

Calculator code raises these directly; the FastAPI handlers in
`core.error_handlers` turn them into JSON error envelopes.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputError(AppException):
    """Raised when the caller passes structurally invalid data.

    Examples are an empty goal selection, an unknown goal id, or a
    non-positive weight. Never corrected silently.
    """

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        """Initialize invalid input error.

        Args:
            message: Validation error message.
            field: Optional name of the offending field.
            value: Optional offending value, echoed back in details.
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = value
        super().__init__(message, status_code=400, details=details)


class MissingInputError(AppException):
    """Raised when a field required for a calculation is absent."""

    def __init__(self, field: str):
        super().__init__(
            f"Missing required input: {field}",
            status_code=422,
            details={"field": field},
        )
        self.field = field


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'User', 'FoodLog').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)


class ConfigurationError(AppException):
    """Exception raised when application configuration is invalid."""

    def __init__(self, message: str, config_key: Optional[str] = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, status_code=500, details=details)
