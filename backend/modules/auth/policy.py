"""
Authorization policy.

Maps roles to capabilities. Route dependencies ask for a capability; this
module is the only place that knows which roles grant which ones.
"""

from enum import Enum

from shared.models import AuthenticatedUser, UserRole


class Capability(str, Enum):
    """Things an authenticated caller may do."""

    USE_PLATFORM = "use_platform"
    MANAGE_PLATFORM = "manage_platform"


_ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.STUDENT: frozenset({Capability.USE_PLATFORM}),
    UserRole.ADMIN: frozenset({Capability.USE_PLATFORM, Capability.MANAGE_PLATFORM}),
}


def has_capability(identity: AuthenticatedUser, capability: Capability) -> bool:
    """Check whether an identity's role grants a capability."""
    return capability in _ROLE_CAPABILITIES.get(identity.role, frozenset())
