"""
Session token data models.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from shared.models import AuthenticatedUser, SubscriptionStatus, UserRole


USER_SESSION_COOKIE = "session_token"
ADMIN_SESSION_COOKIE = "admin_session_token"

USER_SESSION_MAX_AGE_MS = 30 * 24 * 60 * 60 * 1000
ADMIN_SESSION_MAX_AGE_MS = 24 * 60 * 60 * 1000


class SessionRecord(BaseModel):
    """
    Claims carried by a session token.

    Serialized with camelCase keys (``userId``, ``trialEndDate``...) so the
    cookie payload stays readable by the web front end.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    user_id: str = Field(..., alias="userId")
    phone: str = ""
    name: str = ""
    role: UserRole = UserRole.STUDENT
    subscription_status: SubscriptionStatus = Field(
        default=SubscriptionStatus.TRIAL, alias="subscriptionStatus"
    )
    trial_end_date: Optional[datetime] = Field(None, alias="trialEndDate")
    timestamp: int = Field(..., description="Issue time in epoch milliseconds")

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_user(self) -> AuthenticatedUser:
        """Convert the claims into the identity handed to route handlers."""
        return AuthenticatedUser(
            id=self.user_id,
            name=self.name,
            phone=self.phone,
            role=self.role,
            subscription_status=self.subscription_status,
            trial_end_date=self.trial_end_date,
        )
