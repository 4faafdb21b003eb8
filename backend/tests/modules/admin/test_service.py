"""Tests for modules/admin/service.py."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from modules.admin.exceptions import PlanRecordNotFoundError
from modules.admin.models import CreatePlanRequest, PlanRecord, UpdatePlanRequest
from modules.admin.service import AdminService
from shared.exceptions import ValidationError


def _plan(**overrides) -> PlanRecord:
    values = {"id": "p1", "name": "Mensal", "price": 19.9, "duration": "monthly"}
    values.update(overrides)
    return PlanRecord(**values)


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.create_plan.return_value = _plan()
    repo.update_plan.return_value = _plan(price=24.9)
    repo.deactivate_plan.return_value = True
    return repo


@pytest.fixture
def service(repo, clock):
    return AdminService(repo, clock=clock)


class TestPlans:
    @pytest.mark.asyncio
    async def test_create_plan(self, service, repo):
        plan = await service.create_plan(
            CreatePlanRequest(name="Mensal", description="30 dias", price=19.9, duration="monthly")
        )

        data = repo.create_plan.call_args[0][0]
        assert data["is_active"] is True
        assert data["duration"] == "monthly"
        assert plan.id == "p1"

    @pytest.mark.asyncio
    async def test_create_plan_missing_fields(self, service):
        with pytest.raises(ValidationError) as exc_info:
            await service.create_plan(CreatePlanRequest(name="Mensal"))
        assert "Campos obrigatórios" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_create_plan_bad_price(self, service):
        with pytest.raises(ValidationError):
            await service.create_plan(
                CreatePlanRequest(name="X", description="Y", price=-1, duration="monthly")
            )

    @pytest.mark.asyncio
    async def test_create_plan_bad_duration(self, service):
        with pytest.raises(ValidationError):
            await service.create_plan(
                CreatePlanRequest(name="X", description="Y", price=10, duration="weekly")
            )

    @pytest.mark.asyncio
    async def test_update_plan_only_sends_set_fields(self, service, repo):
        await service.update_plan(UpdatePlanRequest(id="p1", price=24.9))
        repo.update_plan.assert_called_once_with("p1", {"price": 24.9})

    @pytest.mark.asyncio
    async def test_update_plan_requires_id(self, service):
        with pytest.raises(ValidationError):
            await service.update_plan(UpdatePlanRequest(name="X"))

    @pytest.mark.asyncio
    async def test_update_missing_plan(self, service, repo):
        repo.update_plan.return_value = None
        with pytest.raises(PlanRecordNotFoundError):
            await service.update_plan(UpdatePlanRequest(id="nope", name="X"))

    @pytest.mark.asyncio
    async def test_deactivate(self, service, repo):
        await service.deactivate_plan("p1")
        repo.deactivate_plan.assert_called_once_with("p1")

    @pytest.mark.asyncio
    async def test_deactivate_missing(self, service, repo):
        repo.deactivate_plan.return_value = False
        with pytest.raises(PlanRecordNotFoundError):
            await service.deactivate_plan("nope")
        with pytest.raises(ValidationError):
            await service.deactivate_plan(None)


class TestSettings:
    @pytest.mark.asyncio
    async def test_get_settings_as_map(self, service, repo):
        repo.list_settings.return_value = [
            {"key": "maintenance", "value": False},
            {"key": "welcome_text", "value": "Olá"},
        ]
        assert await service.get_settings() == {"maintenance": False, "welcome_text": "Olá"}

    @pytest.mark.asyncio
    async def test_update_settings_upserts_each_key(self, service, repo):
        await service.update_settings({"a": 1, "b": "x"})
        assert repo.upsert_setting.call_count == 2
        repo.upsert_setting.assert_any_call("a", 1)

    @pytest.mark.asyncio
    async def test_update_settings_requires_object(self, service):
        with pytest.raises(ValidationError):
            await service.update_settings(None)


class TestStats:
    @pytest.mark.asyncio
    async def test_counts(self, service, repo, clock):
        now = clock.now
        repo.user_activity_rows.return_value = [
            {"created_at": now.isoformat(), "last_login": now.isoformat(), "subscription_status": "active"},
            {
                "created_at": (now - timedelta(days=60)).isoformat(),
                "last_login": (now - timedelta(days=8)).isoformat(),
                "subscription_status": "trial",
            },
            {"created_at": None, "last_login": None, "subscription_status": "expired"},
        ]
        repo.count_laws.return_value = 120
        repo.count_articles.return_value = 100

        stats = await service.get_stats()

        assert stats.users.total == 3
        assert stats.users.active == 1
        assert stats.users.new_this_month == 1
        assert stats.users.premium == 1
        assert stats.content.laws == 120
        assert stats.content.articles == 100

    @pytest.mark.asyncio
    async def test_serializes_camel_case(self, service, repo):
        repo.user_activity_rows.return_value = []
        repo.count_laws.return_value = 0
        repo.count_articles.return_value = 0

        data = (await service.get_stats()).model_dump(by_alias=True)

        assert "newThisMonth" in data["users"]
        assert data["system"]["uptime"] == 100

    @pytest.mark.asyncio
    async def test_actions(self, service):
        assert await service.run_action("refresh_stats") == "Statistics refreshed"
        assert await service.run_action("clear_cache") == "Cache cleared"
        assert await service.run_action("backup_data") == "Backup initiated"
        with pytest.raises(ValidationError):
            await service.run_action("drop_tables")
