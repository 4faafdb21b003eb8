"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


class InvalidPhoneError(ValidationError):
    """Raised when a phone number cannot be normalized to +55 format."""

    def __init__(self, phone: str):
        super().__init__(
            "Telefone deve estar no formato +55XXXXXXXXXXX",
            code="INVALID_PHONE",
            details={"field": "phone", "value": phone},
        )


class InvalidCodeFormatError(ValidationError):
    """Raised when a verification code is not exactly 6 digits."""

    def __init__(self):
        super().__init__(
            "Código deve ter 6 dígitos",
            code="INVALID_CODE_FORMAT",
            details={"field": "code"},
        )


class InvalidOrExpiredCodeError(AuthenticationError):
    """Raised when no active challenge matches the submitted code."""

    def __init__(self):
        super().__init__("Código inválido ou expirado", code="INVALID_OR_EXPIRED_CODE")


class DuplicateUserError(ConflictError):
    """Raised when registering a phone or email that is already in use."""

    def __init__(self, field: str):
        message = "WhatsApp já cadastrado" if field == "phone" else "Email já cadastrado"
        super().__init__(message, code="DUPLICATE_USER", details={"field": field})


class InvalidCredentialsError(AuthenticationError):
    """Raised when admin credentials do not match."""

    def __init__(self):
        super().__init__("Credenciais inválidas", code="INVALID_CREDENTIALS")


class UserNotFoundError(NotFoundError):
    """Raised when the user referenced by a session or request doesn't exist."""

    def __init__(self, user_id: str):
        super().__init__(
            "Usuário não encontrado",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )
