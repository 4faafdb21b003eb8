"""
Session module.

Encodes and verifies the session cookies shared by the auth routes and
the access gate.

Public API:
- SessionCodec: sign/verify session tokens
- SessionRecord: decoded token claims
- is_expired: token age check
"""

from .codec import SessionCodec, create_session_codec, is_expired, now_ms
from .models import (
    SessionRecord,
    USER_SESSION_COOKIE,
    ADMIN_SESSION_COOKIE,
    USER_SESSION_MAX_AGE_MS,
    ADMIN_SESSION_MAX_AGE_MS,
)
from .exceptions import MalformedTokenError

__all__ = [
    "SessionCodec",
    "create_session_codec",
    "is_expired",
    "now_ms",
    "SessionRecord",
    "USER_SESSION_COOKIE",
    "ADMIN_SESSION_COOKIE",
    "USER_SESSION_MAX_AGE_MS",
    "ADMIN_SESSION_MAX_AGE_MS",
    "MalformedTokenError",
]
