"""
Access gate.

Decides, before a page request reaches any handler, whether the caller may
see it, must log in first, or must pay first.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from modules.auth.repository import UserRepository
from modules.billing.subscription import has_premium_access
from modules.sessions import (
    ADMIN_SESSION_MAX_AGE_MS,
    USER_SESSION_MAX_AGE_MS,
    SessionCodec,
    SessionRecord,
)
from shared.config import Settings

from .models import Allow, GateDecision, GateError, Redirect, RouteClass
from .paths import classify_path

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def identity_headers(record: SessionRecord) -> dict[str, str]:
    """Request headers that carry the caller's identity to downstream handlers."""
    return {
        "x-user-id": record.user_id,
        "x-user-name": record.name,
        "x-user-role": record.role.value,
        "x-subscription-status": record.subscription_status.value,
    }


def resolve_decision(decision: GateDecision, path: str) -> GateDecision:
    """
    Turn a gate decision into the action to take.

    This is the only place a GateError becomes an Allow: when the user store
    cannot be consulted the request goes through rather than locking
    everyone out.
    """
    if isinstance(decision, GateError):
        logger.warning("Access gate failing open for %s: %s", path, decision.reason)
        return Allow()
    return decision


class AccessGate:
    """
    Route-class based access control for page requests.

    Args:
        settings: Route prefix sets and redirect targets
        codec: Session token codec
        users: Optional factory for the user repository; when absent the
            premium check cannot run and yields a GateError
        clock: Returns the current UTC time (overridable in tests)
    """

    def __init__(
        self,
        settings: Settings,
        codec: SessionCodec,
        users: Optional[Callable[[], UserRepository]] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._settings = settings
        self._codec = codec
        self._users = users
        self._clock = clock

    def evaluate(
        self,
        path: str,
        user_token: Optional[str],
        admin_token: Optional[str],
    ) -> GateDecision:
        route_class = classify_path(path, self._settings)
        entry = self._settings.gate_entry_path

        if route_class in (RouteClass.BYPASS, RouteClass.PUBLIC):
            return Allow()

        if route_class == RouteClass.ADMIN:
            admin = self._codec.read(admin_token, ADMIN_SESSION_MAX_AGE_MS)
            if admin is None or not admin.is_admin:
                return Redirect(entry)
            return Allow(identity_headers(admin))

        record = self._codec.read(user_token, USER_SESSION_MAX_AGE_MS)
        if record is None:
            return Redirect(entry)

        if route_class == RouteClass.PREMIUM:
            return self._check_premium(record)
        return Allow(identity_headers(record))

    def _check_premium(self, record: SessionRecord) -> GateDecision:
        """Re-read the user row; the token's subscription claims may be stale."""
        if self._users is None:
            return GateError("user store not configured")

        try:
            user = self._users().get_by_id(record.user_id)
        except Exception as e:
            return GateError(f"user lookup failed: {e}")

        if user is None:
            return Redirect(self._settings.gate_entry_path)
        if not has_premium_access(user.subscription_status, user.trial_end_date, self._clock()):
            return Redirect(self._settings.gate_payment_path)

        headers = identity_headers(record)
        headers["x-subscription-status"] = user.subscription_status.value
        return Allow(headers)
