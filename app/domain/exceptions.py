"""Domain exceptions for the Postline application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class PostlineException(Exception):
    """Base exception for all Postline application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the error body sent to API callers."""
        body: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "error": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationException(PostlineException):
    """Raised when input validation fails (e.g. empty content or bad id)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(PostlineException):
    """Raised when the caller has no valid identity."""

    def __init__(
        self, message: str = "You are not authenticated. Please sign in"
    ) -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(PostlineException):
    """Raised when the caller does not own the resource they try to change."""

    def __init__(
        self,
        resource: str | None = None,
        action: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with optional resource, action, and message.

        Args:
            resource: Optional resource type (e.g. 'post').
            action: Optional action that was attempted (e.g. 'update', 'delete').
            message: Human-readable message; default used when resource/action omitted.
        """
        if resource and action:
            message = f"You are not authorized to {action} this {resource}"
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class ResourceNotFoundException(PostlineException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'post', 'category').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type.capitalize()} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class StoreUnavailableException(PostlineException):
    """Raised when the content store cannot be reached or fails a request."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            message="Content store is temporarily unavailable",
            error_code="SERVICE_UNAVAILABLE",
            details={"operation": operation},
        )
