"""
Base exception classes for the Photogram backend.

Each module should define its own exceptions that inherit from these bases.
The API layer maps each base to one HTTP status class, so a module exception
only has to pick the right parent.
"""

from typing import Optional, Any


class PhotogramError(Exception):
    """
    Base exception for all Photogram errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(PhotogramError):
    """Resource not found."""

    pass


class ValidationError(PhotogramError):
    """Request rejected (bad input, already-applied state change, provider validation)."""

    pass


class ConflictError(PhotogramError):
    """Resource already exists (duplicate email, username, ...)."""

    pass


class AuthenticationError(PhotogramError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class ExternalServiceError(PhotogramError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service
