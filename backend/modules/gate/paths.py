"""
Request path classification for the access gate.
"""

import re

from shared.config import Settings

from .models import RouteClass

_IMAGE_PATH = re.compile(r".*\.(?:svg|png|jpg|jpeg|gif|webp)$", re.IGNORECASE)


def _matches(path: str, prefix: str) -> bool:
    prefix = prefix.rstrip("/")
    return path == prefix or path.startswith(f"{prefix}/")


def classify_path(path: str, settings: Settings) -> RouteClass:
    """
    Classify a request path; first match wins.

    The entry page matches only exactly, never as a prefix.
    """
    if _IMAGE_PATH.match(path) or any(_matches(path, p) for p in settings.gate_bypass_prefixes):
        return RouteClass.BYPASS
    if path == settings.gate_entry_path or any(
        _matches(path, p) for p in settings.gate_public_prefixes
    ):
        return RouteClass.PUBLIC
    if any(_matches(path, p) for p in settings.gate_admin_prefixes):
        return RouteClass.ADMIN
    if any(_matches(path, p) for p in settings.gate_premium_prefixes):
        return RouteClass.PREMIUM
    return RouteClass.PROTECTED
