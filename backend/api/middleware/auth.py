"""
Session cookie authentication dependencies.

Reads the signed session cookies and turns them into an AuthenticatedUser.
Role checks go through modules.auth.policy; route handlers never compare
roles themselves.
"""

from typing import Optional

from fastapi import Cookie, Depends, HTTPException, status

from modules.auth.policy import Capability, has_capability
from modules.sessions import (
    ADMIN_SESSION_COOKIE,
    ADMIN_SESSION_MAX_AGE_MS,
    USER_SESSION_COOKIE,
    USER_SESSION_MAX_AGE_MS,
    SessionCodec,
)
from shared.models import AuthenticatedUser

from ..dependencies import get_session_codec


class AuthError(HTTPException):
    """Authentication error with consistent format."""

    def __init__(self, detail: str = "Não autenticado"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class ForbiddenError(HTTPException):
    """Authenticated but lacking the capability."""

    def __init__(self, detail: str = "Acesso negado"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


async def get_optional_user(
    session_token: Optional[str] = Cookie(default=None, alias=USER_SESSION_COOKIE),
    codec: SessionCodec = Depends(get_session_codec),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts the user from the session cookie.

    Invalid or expired tokens are treated as anonymous.
    """
    record = codec.read(session_token, USER_SESSION_MAX_AGE_MS)
    return record.to_user() if record else None


async def require_user(
    user: Optional[AuthenticatedUser] = Depends(get_optional_user),
) -> AuthenticatedUser:
    """
    Dependency that requires a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(require_user)):
            return {"user_id": user.id}
    """
    if user is None or not has_capability(user, Capability.USE_PLATFORM):
        raise AuthError()
    return user


async def require_admin(
    admin_session_token: Optional[str] = Cookie(default=None, alias=ADMIN_SESSION_COOKIE),
    codec: SessionCodec = Depends(get_session_codec),
) -> AuthenticatedUser:
    """Dependency that requires a signed, unexpired admin session."""
    record = codec.read(admin_session_token, ADMIN_SESSION_MAX_AGE_MS)
    if record is None:
        raise AuthError("Sessão de administrador inválida ou expirada")
    admin = record.to_user()
    if not has_capability(admin, Capability.MANAGE_PLATFORM):
        raise ForbiddenError()
    return admin


# Type aliases for cleaner route definitions
RequireUser = Depends(require_user)
RequireAdmin = Depends(require_admin)
