"""
Admin module interface.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from .models import CreatePlanRequest, PlanRecord, PlatformStats, UpdatePlanRequest


@runtime_checkable
class IAdminService(Protocol):
    """
    Interface for back-office operations.

    Callers are responsible for checking the admin capability first.
    """

    async def list_plans(self) -> list[PlanRecord]:
        """Active plans, oldest first."""
        ...

    async def create_plan(self, request: CreatePlanRequest) -> PlanRecord:
        """
        Raises:
            ValidationError: If a field is missing, price <= 0, or the
                duration is not monthly/yearly
        """
        ...

    async def update_plan(self, request: UpdatePlanRequest) -> PlanRecord:
        ...

    async def deactivate_plan(self, plan_id: Optional[str]) -> None:
        ...

    async def get_settings(self) -> dict[str, Any]:
        """All system settings as a key -> value map."""
        ...

    async def update_settings(self, settings: Optional[dict[str, Any]]) -> None:
        """Upsert every key in ``settings``."""
        ...

    async def get_stats(self) -> PlatformStats:
        ...

    async def run_action(self, action: Optional[str]) -> str:
        """Run a dashboard maintenance action and return its status message."""
        ...
