"""
Admin service implementation.

Back-office operations: subscription plan CRUD, system settings and
dashboard statistics.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from modules.billing.models import PlanDuration
from shared.exceptions import ValidationError
from shared.models import SubscriptionStatus

from .exceptions import PlanRecordNotFoundError
from .interfaces import IAdminService
from .models import (
    ContentStats,
    CreatePlanRequest,
    PlanRecord,
    PlatformStats,
    StatsAction,
    UpdatePlanRequest,
    UserStatsSummary,
)
from .repository import AdminRepository

logger = logging.getLogger(__name__)

ACTIVE_WINDOW = timedelta(days=7)

_ACTION_MESSAGES = {
    StatsAction.REFRESH_STATS: "Statistics refreshed",
    StatsAction.CLEAR_CACHE: "Cache cleared",
    StatsAction.BACKUP_DATA: "Backup initiated",
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_ts(value: Any) -> Optional[datetime]:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _validate_duration(duration: str) -> None:
    if duration not in {d.value for d in PlanDuration}:
        raise ValidationError(
            "Duration deve ser monthly ou yearly", details={"field": "duration"}
        )


class AdminService(IAdminService):
    """
    Implementation of the admin service.

    Args:
        repository: Admin repository
        clock: Returns the current UTC time (overridable in tests)
    """

    def __init__(self, repository: AdminRepository, clock: Callable[[], datetime] = _utcnow):
        self._repo = repository
        self._clock = clock

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    async def list_plans(self) -> list[PlanRecord]:
        return self._repo.list_active_plans()

    async def create_plan(self, request: CreatePlanRequest) -> PlanRecord:
        if not (request.name and request.description and request.price and request.duration):
            raise ValidationError("Campos obrigatórios: name, description, price, duration")
        if request.price <= 0:
            raise ValidationError("Preço deve ser maior que zero", details={"field": "price"})
        _validate_duration(request.duration)

        plan = self._repo.create_plan(
            {
                "name": request.name,
                "description": request.description,
                "price": request.price,
                "duration": request.duration,
                "features": request.features,
                "is_active": True,
            }
        )
        logger.info("Created plan %s", plan.id)
        return plan

    async def update_plan(self, request: UpdatePlanRequest) -> PlanRecord:
        if not request.id:
            raise ValidationError("ID do plano é obrigatório", details={"field": "id"})

        data = request.model_dump(exclude_unset=True, exclude={"id"})
        if "price" in data and (data["price"] is None or data["price"] <= 0):
            raise ValidationError("Preço deve ser maior que zero", details={"field": "price"})
        if "duration" in data:
            _validate_duration(data["duration"])

        plan = self._repo.update_plan(request.id, data)
        if plan is None:
            raise PlanRecordNotFoundError(request.id)
        logger.info("Updated plan %s", plan.id)
        return plan

    async def deactivate_plan(self, plan_id: Optional[str]) -> None:
        """Soft delete: the row stays, marked inactive."""
        if not plan_id:
            raise ValidationError("ID do plano é obrigatório", details={"field": "id"})
        if not self._repo.deactivate_plan(plan_id):
            raise PlanRecordNotFoundError(plan_id)
        logger.info("Deactivated plan %s", plan_id)

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    async def get_settings(self) -> dict[str, Any]:
        return {row["key"]: row.get("value") for row in self._repo.list_settings()}

    async def update_settings(self, settings: Optional[dict[str, Any]]) -> None:
        if not isinstance(settings, dict):
            raise ValidationError("Configurações inválidas", details={"field": "settings"})
        for key, value in settings.items():
            self._repo.upsert_setting(key, value)
        logger.info("Updated %d system settings", len(settings))

    # -------------------------------------------------------------------------
    # Stats
    # -------------------------------------------------------------------------

    async def get_stats(self) -> PlatformStats:
        now = self._clock()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        active_since = now - ACTIVE_WINDOW

        rows = self._repo.user_activity_rows()
        new_this_month = 0
        active = 0
        premium = 0
        for row in rows:
            created_at = _parse_ts(row.get("created_at"))
            last_login = _parse_ts(row.get("last_login"))
            if created_at and created_at >= month_start:
                new_this_month += 1
            if last_login and last_login >= active_since:
                active += 1
            if row.get("subscription_status") == SubscriptionStatus.ACTIVE.value:
                premium += 1

        return PlatformStats(
            users=UserStatsSummary(
                total=len(rows),
                active=active,
                new_this_month=new_this_month,
                premium=premium,
            ),
            content=ContentStats(
                laws=self._repo.count_laws(),
                articles=self._repo.count_articles(),
            ),
        )

    async def run_action(self, action: Optional[str]) -> str:
        try:
            stats_action = StatsAction(action)
        except ValueError:
            raise ValidationError("Invalid action", details={"field": "action"})
        logger.info("Admin action %s requested", stats_action.value)
        return _ACTION_MESSAGES[stats_action]
