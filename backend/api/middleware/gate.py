"""
Access gate middleware.

Runs the AccessGate for every request and either redirects or forwards the
request with identity headers attached.
"""

from typing import Callable, Optional

from fastapi import Request
from fastapi.responses import RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from modules.gate import AccessGate, Allow, Redirect, resolve_decision
from modules.sessions import ADMIN_SESSION_COOKIE, USER_SESSION_COOKIE

IDENTITY_HEADER_PREFIX = b"x-user-"
SUBSCRIPTION_HEADER = b"x-subscription-status"


class AccessGateMiddleware(BaseHTTPMiddleware):
    """
    Enforce the access gate before any route handler runs.

    Identity headers sent by the client are always stripped; only the gate
    may set them.
    """

    def __init__(self, app: ASGIApp, gate_factory: Optional[Callable[[], AccessGate]] = None):
        super().__init__(app)
        self._gate_factory = gate_factory

    def _gate(self) -> AccessGate:
        if self._gate_factory is not None:
            return self._gate_factory()
        from ..dependencies import get_container
        return get_container().gate

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        decision = resolve_decision(
            self._gate().evaluate(
                path,
                request.cookies.get(USER_SESSION_COOKIE),
                request.cookies.get(ADMIN_SESSION_COOKIE),
            ),
            path,
        )

        if isinstance(decision, Redirect):
            return RedirectResponse(decision.location, status_code=307)

        headers = [
            (name, value)
            for name, value in request.scope["headers"]
            if not name.lower().startswith(IDENTITY_HEADER_PREFIX)
            and name.lower() != SUBSCRIPTION_HEADER
        ]
        if isinstance(decision, Allow):
            headers.extend(
                (name.encode("latin-1"), value.encode("utf-8"))
                for name, value in decision.headers.items()
            )
        request.scope["headers"] = headers

        return await call_next(request)
