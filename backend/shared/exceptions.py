"""
Base exception classes for the Estudar.Pro backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class EstudarError(Exception):
    """
    Base exception for all Estudar.Pro errors.

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


class NotFoundError(EstudarError):
    """Resource not found."""

    pass


class ValidationError(EstudarError):
    """Input validation failed."""

    pass


class ConflictError(EstudarError):
    """Resource already exists."""

    pass


class AuthenticationError(EstudarError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(EstudarError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(EstudarError):
    """A required setting is missing."""

    pass


class DatabaseNotConfiguredError(ConfigurationError):
    """Supabase credentials are not set."""

    def __init__(self):
        super().__init__(
            "Database not configured",
            code="DATABASE_NOT_CONFIGURED",
        )


class ExternalServiceError(EstudarError):
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
