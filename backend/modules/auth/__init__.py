"""
Authentication module.

Handles registration, WhatsApp OTP login, admin login and profile updates.

Public API:
- IAuthService: Interface for auth operations
- User / VerificationSession: Stored records
- normalize_phone, generate_code, validate_code_format: OTP helpers
- Capability, has_capability: Authorization policy
- Auth exceptions: InvalidOrExpiredCodeError, DuplicateUserError, etc.
"""

from .interfaces import IAuthService
from .models import (
    User,
    UserStats,
    VerificationPurpose,
    VerificationSession,
    LoginChallenge,
    RegistrationResult,
    SessionResult,
    IdentityResponse,
)
from .otp import normalize_phone, generate_code, validate_code_format
from .policy import Capability, has_capability
from .exceptions import (
    InvalidPhoneError,
    InvalidCodeFormatError,
    InvalidOrExpiredCodeError,
    DuplicateUserError,
    InvalidCredentialsError,
    UserNotFoundError,
)

__all__ = [
    # Interface
    "IAuthService",
    # Models
    "User",
    "UserStats",
    "VerificationPurpose",
    "VerificationSession",
    "LoginChallenge",
    "RegistrationResult",
    "SessionResult",
    "IdentityResponse",
    # OTP helpers
    "normalize_phone",
    "generate_code",
    "validate_code_format",
    # Policy
    "Capability",
    "has_capability",
    # Exceptions
    "InvalidPhoneError",
    "InvalidCodeFormatError",
    "InvalidOrExpiredCodeError",
    "DuplicateUserError",
    "InvalidCredentialsError",
    "UserNotFoundError",
]
