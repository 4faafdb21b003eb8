"""
Access gate module.

Classifies page requests into public, protected, premium and admin routes
and enforces the matching rule.

Public API:
- AccessGate: evaluates a request path against the caller's cookies
- Allow / Redirect / GateError: decision types
- resolve_decision: maps a decision to the action taken
- classify_path: path -> RouteClass
"""

from .models import Allow, GateDecision, GateError, Redirect, RouteClass
from .paths import classify_path
from .service import AccessGate, identity_headers, resolve_decision

__all__ = [
    "AccessGate",
    "Allow",
    "GateDecision",
    "GateError",
    "Redirect",
    "RouteClass",
    "classify_path",
    "identity_headers",
    "resolve_decision",
]
