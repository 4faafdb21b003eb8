"""
Access gate decision types.

``AccessGate.evaluate`` returns one of these instead of raising, so the
caller always sees exactly how a request was classified.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union


class RouteClass(str, Enum):
    """How a request path is treated by the gate."""

    BYPASS = "bypass"
    PUBLIC = "public"
    ADMIN = "admin"
    PREMIUM = "premium"
    PROTECTED = "protected"


@dataclass(frozen=True)
class Allow:
    """Let the request through, adding these request headers."""

    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Redirect:
    """Send the browser elsewhere (entry page or payment page)."""

    location: str


@dataclass(frozen=True)
class GateError:
    """The gate could not reach a decision (e.g. the user store failed)."""

    reason: str


GateDecision = Union[Allow, Redirect, GateError]
