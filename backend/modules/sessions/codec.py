"""
Session token codec.

Encodes a user identity plus trial metadata into an opaque cookie value
and reads it back. Tokens are HS256-signed JWTs: the payload is still a
base64url JSON record, but any tampering invalidates the signature.
There is no server-side session store; the token age is checked against
a fixed max age on every use.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import Settings
from shared.exceptions import ConfigurationError
from shared.models import AuthenticatedUser

from .exceptions import MalformedTokenError
from .models import SessionRecord

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
DEV_SECRET = "estudar-dev-session-secret"


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)


def is_expired(record: SessionRecord, max_age_ms: int, now: Optional[int] = None) -> bool:
    """
    Check a decoded token against a max age.

    Args:
        record: Decoded session claims
        max_age_ms: Maximum token age in milliseconds
        now: Current time in epoch ms (defaults to the wall clock)

    Returns:
        True if the token is older than max_age_ms
    """
    current = now_ms() if now is None else now
    return current - record.timestamp > max_age_ms


class SessionCodec:
    """Signs and verifies session tokens with a shared secret."""

    def __init__(self, secret: str):
        if not secret:
            raise ConfigurationError(
                "Session secret not configured. Set SESSION_SECRET.",
                code="SESSION_SECRET_MISSING",
            )
        self._secret = secret

    def encode(self, user: AuthenticatedUser, timestamp: Optional[int] = None) -> str:
        """
        Serialize an identity into a signed token with a fresh timestamp.

        Args:
            user: Identity to encode
            timestamp: Issue time override in epoch ms (tests use this)

        Returns:
            Token string suitable for a cookie value
        """
        record = SessionRecord(
            user_id=user.id,
            phone=user.phone,
            name=user.name,
            role=user.role,
            subscription_status=user.subscription_status,
            trial_end_date=user.trial_end_date,
            timestamp=now_ms() if timestamp is None else timestamp,
        )
        payload = record.model_dump(mode="json", by_alias=True)
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def decode(self, token: str) -> SessionRecord:
        """
        Verify and parse a token.

        Raises:
            MalformedTokenError: If the signature is invalid or the payload
                does not have the expected structure
        """
        if not token:
            raise MalformedTokenError("Empty session token")

        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Invalid session token: {e}")

        try:
            return SessionRecord.model_validate(payload)
        except PydanticValidationError:
            raise MalformedTokenError("Session token payload has unexpected structure")

    def read(self, token: Optional[str], max_age_ms: int) -> Optional[SessionRecord]:
        """
        Decode a cookie value for the read path.

        Any decode failure or an expired token means "not authenticated":
        returns None instead of raising.
        """
        if not token:
            return None
        try:
            record = self.decode(token)
        except MalformedTokenError as e:
            logger.debug("Rejected session token: %s", e.message)
            return None
        if is_expired(record, max_age_ms):
            logger.debug("Session token for user %s has expired", record.user_id)
            return None
        return record


def create_session_codec(settings: Settings) -> SessionCodec:
    """
    Build the codec from settings.

    In debug mode a missing secret falls back to a development key;
    otherwise it is a startup error.
    """
    if settings.session_secret:
        return SessionCodec(settings.session_secret)
    if settings.debug:
        logger.warning("SESSION_SECRET not set; using development secret (debug mode)")
        return SessionCodec(DEV_SECRET)
    return SessionCodec("")
