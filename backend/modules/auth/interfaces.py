"""
Authentication module interface.

Other modules should depend on IAuthService, not the concrete implementation.
This enables testing with mocks.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import (
    IdentityResponse,
    LoginChallenge,
    RegistrationResult,
    SessionResult,
    User,
    VerificationPurpose,
)


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for registration, WhatsApp OTP login and admin login.

    Every method that ends in a session returns a SessionResult carrying a
    freshly signed token; the route layer turns it into a cookie.
    """

    async def register(self, name: str, email: str, phone: str) -> RegistrationResult:
        """
        Create a trial user and send a registration code.

        Raises:
            ValidationError: If a field is missing or malformed
            DuplicateUserError: If the phone or email is already registered
        """
        ...

    async def verify_registration(self, phone: str, code: str) -> SessionResult:
        """
        Confirm a registration code and start a session.

        Raises:
            InvalidCodeFormatError: If the code is not 6 digits
            InvalidOrExpiredCodeError: If no active challenge matches
        """
        ...

    async def initiate_login(self, name: str, phone: str) -> LoginChallenge:
        """
        Issue a login challenge and deliver its code over WhatsApp.

        Raises:
            InvalidPhoneError: If the phone cannot be normalized
            MessageDeliveryError: If the code could not be sent
        """
        ...

    async def verify_login(self, verification_id: str, code: str) -> SessionResult:
        """
        Consume a login challenge, creating the user on first login.

        Raises:
            InvalidCodeFormatError: If the code is not 6 digits
            InvalidOrExpiredCodeError: If the challenge is unknown, consumed,
                expired, superseded or the code does not match
        """
        ...

    async def resend_code(
        self,
        phone: str,
        purpose: VerificationPurpose,
        name: Optional[str] = None,
    ) -> LoginChallenge:
        """Issue a brand-new challenge for the phone, superseding older ones."""
        ...

    async def get_identity(
        self,
        user_token: Optional[str],
        admin_token: Optional[str],
    ) -> IdentityResponse:
        """Resolve the caller from its cookies; never raises for bad tokens."""
        ...

    async def admin_login(self, email: str, password: str) -> str:
        """
        Check admin credentials and return an admin session token.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        ...

    async def update_profile(
        self,
        user_id: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
    ) -> User:
        """
        Update a user's own profile.

        Raises:
            ValidationError: If name or email is invalid
            ConflictError: If the email belongs to another user
            UserNotFoundError: If the user no longer exists
        """
        ...
