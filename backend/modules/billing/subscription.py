"""
Subscription access rules.

Shared by the access gate and anything else that decides whether a user
may use premium features.
"""

from datetime import datetime, timezone
from typing import Optional

from shared.models import SubscriptionStatus


def is_trial_expired(trial_end_date: Optional[datetime], now: Optional[datetime] = None) -> bool:
    """True once ``now`` is strictly past the end of the trial window."""
    if trial_end_date is None:
        return False
    now = now or datetime.now(timezone.utc)
    return now > trial_end_date


def has_premium_access(
    subscription_status: SubscriptionStatus,
    trial_end_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> bool:
    """
    Whether a user may use premium routes.

    Active subscribers always may; everyone else only while the trial
    window is still open. Without a trial end date there is no window.
    """
    if subscription_status == SubscriptionStatus.ACTIVE:
        return True
    if trial_end_date is None:
        return False
    return not is_trial_expired(trial_end_date, now)
