"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class UserRole(str, Enum):
    """Roles a user can hold."""

    ADMIN = "admin"
    STUDENT = "student"


class SubscriptionStatus(str, Enum):
    """Exactly one of these holds for a user at any time."""

    TRIAL = "trial"
    ACTIVE = "active"
    EXPIRED = "expired"


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from the claims of a verified session token
    and made available to route handlers via dependency injection.
    It is a snapshot taken at login time; subscription state that matters
    for access decisions must be re-read from the users table.
    """

    id: str = Field(..., description="User ID")
    name: str = Field(default="", description="Display name")
    phone: str = Field(default="", description="Phone in +55... format")
    role: UserRole = Field(default=UserRole.STUDENT, description="User role")
    subscription_status: SubscriptionStatus = Field(
        default=SubscriptionStatus.TRIAL,
        description="Subscription status at login time",
    )
    trial_end_date: Optional[datetime] = Field(None, description="End of the trial window")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",
    }
