"""Tests for the /api/payment and /api/webhooks endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from api.dependencies import get_billing_service
from modules.billing.exceptions import PaymentProviderError, PlanNotFoundError
from modules.billing.models import DEFAULT_PLANS, PreferenceResult, TransactionStatus, WebhookResult, find_plan


@pytest.fixture
def billing():
    service = MagicMock()
    service.list_plans.return_value = list(DEFAULT_PLANS)
    service.create_preference = AsyncMock(
        return_value=PreferenceResult(
            preference_id="pref-1",
            init_point="https://mp/checkout/pref-1",
            plan=find_plan("monthly"),
        )
    )
    service.process_webhook = AsyncMock(
        return_value=WebhookResult(
            success=True, message="Webhook processed successfully", status=TransactionStatus.COMPLETED
        )
    )
    return service


@pytest.fixture
def billing_client(app, client, billing):
    app.dependency_overrides[get_billing_service] = lambda: billing
    return client


class TestCreatePreferenceRoutes:
    def test_list_plans(self, billing_client):
        body = billing_client.get("/api/payment/create-preference").json()
        assert [p["id"] for p in body["plans"]] == ["monthly", "yearly"]

    def test_requires_session(self, billing_client, billing):
        response = billing_client.post("/api/payment/create-preference", json={"planId": "monthly"})
        assert response.status_code == 401
        billing.create_preference.assert_not_called()

    def test_creates_for_session_user(self, billing_client, billing, user_token):
        billing_client.cookies.set("session_token", user_token)

        response = billing_client.post("/api/payment/create-preference", json={"planId": "monthly"})

        assert response.status_code == 200
        body = response.json()
        assert body["preferenceId"] == "pref-1"
        assert body["initPoint"] == "https://mp/checkout/pref-1"
        assert body["plan"]["id"] == "monthly"
        billing.create_preference.assert_awaited_once_with("monthly", "user-123")

    def test_unknown_plan_is_404(self, billing_client, billing, user_token):
        billing.create_preference.side_effect = PlanNotFoundError("lifetime")
        billing_client.cookies.set("session_token", user_token)

        response = billing_client.post("/api/payment/create-preference", json={"planId": "lifetime"})

        assert response.status_code == 404

    def test_provider_error_is_500(self, billing_client, billing, user_token):
        billing.create_preference.side_effect = PaymentProviderError("down")
        billing_client.cookies.set("session_token", user_token)

        response = billing_client.post("/api/payment/create-preference", json={"planId": "monthly"})

        assert response.status_code == 500


class TestWebhookRoutes:
    def test_status(self, billing_client):
        assert billing_client.get("/api/webhooks/mercadopago").json()["success"] is True

    def test_json_notification(self, billing_client, billing):
        response = billing_client.post(
            "/api/webhooks/mercadopago", json={"type": "payment", "data": {"id": 555}}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Webhook processed successfully",
            "status": "completed",
        }
        billing.process_webhook.assert_awaited_once_with("payment", "555")

    def test_query_notification(self, billing_client, billing):
        billing_client.post("/api/webhooks/mercadopago?topic=payment&id=777")
        billing.process_webhook.assert_awaited_once_with("payment", "777")

    def test_provider_error_is_500(self, billing_client, billing):
        billing.process_webhook.side_effect = PaymentProviderError("down")
        response = billing_client.post(
            "/api/webhooks/mercadopago", json={"type": "payment", "data": {"id": "1"}}
        )
        assert response.status_code == 500
