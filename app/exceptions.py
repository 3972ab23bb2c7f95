from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message, safe to return to the caller
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    http_status is 400.
    """

    http_status = 400
    default_message = "Invalid input"


class UnauthorizedError(ServiceError):
    """Raised when the caller could not be authenticated. http_status is 401."""

    http_status = 401
    default_message = "Unauthorized: Not authenticated"


class ForbiddenError(ServiceError):
    """Raised when an authenticated caller lacks the required role. http_status is 403."""

    http_status = 403
    default_message = "Forbidden"


class ConflictError(ServiceError):
    """Raised when a resource conflict occurs (e.g., a meal already booked for a slot).

    http_status is 409.
    """

    http_status = 409
    default_message = "Conflict"


class InternalError(ServiceError):
    """Raised for unexpected store or runtime failures.

    The message never carries the underlying cause; handlers log that separately.
    """

    http_status = 500
