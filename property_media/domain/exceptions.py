"""Domain exceptions for the property media service.

Defines the base exception and caller-facing validation errors. These
are independent of infrastructure concerns. Presentation layer maps them
to HTTP responses in exception handlers.
"""

from typing import Any


class PropertyMediaException(Exception):
    """Base exception for all property media errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, owner_id).
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
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PropertyMediaException):
    """Raised when input validation fails (e.g. unknown category or media kind)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class NoFileProvidedError(PropertyMediaException):
    """Raised when a save is attempted with an empty or missing buffer."""

    def __init__(self, owner_id: str, category: str) -> None:
        super().__init__(
            "No file provided",
            "NO_FILE_PROVIDED",
            {"owner_id": owner_id, "category": category},
        )
