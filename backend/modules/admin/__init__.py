"""
Admin module.

Back-office plan management, system settings and dashboard statistics.

Public API:
- IAdminService: Interface for admin operations
- PlanRecord, PlatformStats: Admin models
"""

from .interfaces import IAdminService
from .models import PlanRecord, PlatformStats, StatsAction
from .exceptions import PlanRecordNotFoundError

__all__ = [
    "IAdminService",
    "PlanRecord",
    "PlatformStats",
    "StatsAction",
    "PlanRecordNotFoundError",
]
