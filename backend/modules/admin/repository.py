"""
Admin repository for database access.

Covers the back-office tables:
- subscription_plans
- system_settings
and the read-only counters taken from users and laws.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import PlanRecord


class AdminRepository(BaseRepository[PlanRecord]):
    """Repository for admin-managed data."""

    # -------------------------------------------------------------------------
    # Plans
    # -------------------------------------------------------------------------

    def list_active_plans(self) -> list[PlanRecord]:
        result = (
            self._db.table("subscription_plans")
            .select("*")
            .eq("is_active", True)
            .order("created_at")
            .execute()
        )
        return [PlanRecord.model_validate(row) for row in result.data or []]

    def create_plan(self, data: dict[str, Any]) -> PlanRecord:
        result = self._db.table("subscription_plans").insert(data).execute()
        return PlanRecord.model_validate(result.data[0])

    def update_plan(self, plan_id: str, data: dict[str, Any]) -> Optional[PlanRecord]:
        result = self._db.table("subscription_plans").update(data).eq("id", plan_id).execute()
        row = self._first(result.data)
        return PlanRecord.model_validate(row) if row else None

    def deactivate_plan(self, plan_id: str) -> bool:
        result = (
            self._db.table("subscription_plans")
            .update({"is_active": False})
            .eq("id", plan_id)
            .execute()
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def list_settings(self) -> list[dict[str, Any]]:
        result = self._db.table("system_settings").select("*").order("key").execute()
        return result.data or []

    def upsert_setting(self, key: str, value: Any) -> None:
        self._db.table("system_settings").upsert(
            {"key": key, "value": value, "updated_at": self._now_iso()}
        ).execute()

    # -------------------------------------------------------------------------
    # Counters
    # -------------------------------------------------------------------------

    def user_activity_rows(self) -> list[dict[str, Any]]:
        result = (
            self._db.table("users")
            .select("id, created_at, last_login, subscription_status")
            .execute()
        )
        return result.data or []

    def count_laws(self) -> int:
        result = self._db.table("laws").select("id", count="exact").execute()
        return result.count or 0

    def count_articles(self) -> int:
        """Laws with an article label."""
        result = (
            self._db.table("laws")
            .select("id", count="exact")
            .not_.is_("article", "null")
            .execute()
        )
        return result.count or 0
