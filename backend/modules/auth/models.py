"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser, SubscriptionStatus, UserRole


class UserStats(BaseModel):
    """Aggregate study counters kept on the user row."""

    quizzes_completed: int = 0
    flashcards_reviewed: int = 0
    study_time_minutes: int = 0
    last_activity: Optional[datetime] = None


class User(BaseModel):
    """
    A platform user with subscription state.

    ``is_trial_expired`` is derived data: call ``refresh_trial_state`` after
    reading a row instead of trusting the stored flag.
    """

    id: str = Field(..., description="User ID (UUID)")
    name: str = Field(..., description="Display name")
    phone: str = Field(..., description="Phone in +55... format")
    email: Optional[str] = Field(None, description="Email address")
    role: UserRole = Field(default=UserRole.STUDENT)
    subscription_status: SubscriptionStatus = Field(default=SubscriptionStatus.TRIAL)
    subscription_plan: Optional[str] = None
    subscription_end_date: Optional[datetime] = None
    trial_start_date: Optional[datetime] = None
    trial_end_date: Optional[datetime] = None
    is_trial_expired: bool = False
    is_verified: bool = False
    stats: UserStats = Field(default_factory=UserStats)
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    def refresh_trial_state(self, now: Optional[datetime] = None) -> "User":
        """Return a copy with ``is_trial_expired`` recomputed for ``now``."""
        now = now or datetime.now(timezone.utc)
        expired = self.trial_end_date is not None and now > self.trial_end_date
        return self.model_copy(update={"is_trial_expired": expired})

    def to_identity(self) -> AuthenticatedUser:
        """The claims that go into a session token."""
        return AuthenticatedUser(
            id=self.id,
            name=self.name,
            phone=self.phone,
            role=self.role,
            subscription_status=self.subscription_status,
            trial_end_date=self.trial_end_date,
        )

    def public_dict(self) -> dict[str, Any]:
        """Fields safe to return to the client."""
        return self.model_dump(
            mode="json",
            include={
                "id",
                "name",
                "email",
                "phone",
                "role",
                "subscription_status",
                "trial_end_date",
                "is_trial_expired",
                "is_verified",
                "created_at",
                "last_login",
            },
        )


class VerificationPurpose(str, Enum):
    """What a verification code proves."""

    LOGIN = "login"
    REGISTRATION = "registration"


class VerificationSession(BaseModel):
    """
    An OTP challenge.

    Single use: once ``is_verified`` is set it can never be accepted again.
    Expiry is checked lazily at verify time.
    """

    id: str
    phone: str
    code: str
    name: str = ""
    purpose: VerificationPurpose = VerificationPurpose.LOGIN
    user_id: Optional[str] = None
    expires_at: datetime
    is_verified: bool = False
    created_at: datetime

    def is_active(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return not self.is_verified and now <= self.expires_at


# -----------------------------------------------------------------------------
# Request models
# -----------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    phone: str = Field(..., min_length=1)


class VerifyRegistrationRequest(BaseModel):
    phone: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)


class InitiateLoginRequest(BaseModel):
    name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)


class VerifyLoginRequest(BaseModel):
    verification_id: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)


class ResendCodeRequest(BaseModel):
    phone: str = Field(..., min_length=1)
    purpose: VerificationPurpose = VerificationPurpose.REGISTRATION
    name: Optional[str] = None


class AdminLoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    name: str
    email: str
    phone: Optional[str] = None


# -----------------------------------------------------------------------------
# Result models
# -----------------------------------------------------------------------------


class RegistrationResult(BaseModel):
    user: User
    verification_id: str
    code_sent: bool


class LoginChallenge(BaseModel):
    verification_id: str
    is_new_user: bool
    message: str


class SessionResult(BaseModel):
    """Outcome of a successful verification: the user and a fresh token."""

    user: User
    session_token: str
    is_new_user: bool = False


class IdentityResponse(BaseModel):
    """Response for GET /api/auth/me."""

    authenticated: bool
    user: Optional[dict[str, Any]] = None
    provider: Optional[str] = None
