"""
Portfolio Backend — Custom Exception Hierarchy
================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages, without leaking internals.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services and routes; caught by global handlers.

Exception Hierarchy:
    PortfolioError (base)
    ├── ValidationError              → 400 Bad Request (client can fix)
    │   ├── AddressExtractionError   → 400 Bad Request (no client address)
    │   └── InvalidLocationError     → 422 Unprocessable Entity
    ├── NotFoundError                → 404 Not Found
    ├── FingerprintError             → 500 Internal Server Error
    └── DatabaseError                → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class PortfolioError(Exception):
    """
    Base exception for all portfolio application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client
                  unless the handler says otherwise)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PortfolioError):
    """
    Raised when client input fails validation.

    When:    Malformed project identifier, missing fields the schema can't catch.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Invalid project ID",
            "details": {"field": "project_id"}
        }
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AddressExtractionError(ValidationError):
    """Raised when the request carries no usable client network address."""

    def __init__(self, context: Optional[Dict[str, Any]] = None):
        super().__init__(
            message="Address extraction failed: client network address is unavailable",
            field="network_address",
            context=context,
        )


class InvalidLocationError(ValidationError):
    """
    Raised when a submitted latitude/longitude can't be used.

    When:    Non-numeric, non-finite or out-of-range coordinates.
    HTTP:    422 Unprocessable Entity
    """

    def __init__(
        self,
        field: str,
        value: Any = None,
        reason: str = "must be a finite number",
    ):
        super().__init__(
            message=f"Unprocessable location: {field} {reason}",
            field=field,
            context={"value": repr(value)},
        )


class NotFoundError(PortfolioError):
    """
    Raised when a requested resource does not exist.

    When:    GET /api/certifications/{title} or /api/projects/details/{id}
             with a key that matches nothing.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource.capitalize()} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FingerprintError(PortfolioError):
    """
    Raised when a device fingerprint can't be generated for the request.

    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "Fingerprint generation error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(PortfolioError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, failed insert, constraint violation.
    HTTP:    500 Internal Server Error

    Security Note:
        The message returned to the client is always generic.
        Detailed error info is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
