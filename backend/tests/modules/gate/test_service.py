"""Tests for modules/gate/service.py."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from modules.auth.models import User
from modules.gate import AccessGate, Allow, GateError, Redirect, resolve_decision
from modules.sessions import ADMIN_SESSION_MAX_AGE_MS, now_ms
from shared.models import AuthenticatedUser, SubscriptionStatus

from datetime import datetime, timezone

NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def _user(status="trial", trial_end=NOW + timedelta(days=1)) -> User:
    return User(
        id="user-123",
        name="Maria Silva",
        phone="+5511987654321",
        subscription_status=status,
        trial_end_date=trial_end,
    )


def _gate(settings, codec, user=None, users_factory=...):
    if users_factory is ...:
        repo = MagicMock()
        repo.get_by_id.return_value = user
        users_factory = lambda: repo  # noqa: E731
    return AccessGate(settings, codec, users=users_factory, clock=lambda: NOW)


class TestPublicAndBypass:
    def test_public_without_cookies(self, settings, codec):
        assert _gate(settings, codec).evaluate("/planos", None, None) == Allow()

    def test_bypass_ignores_garbage_cookie(self, settings, codec):
        assert _gate(settings, codec).evaluate("/api/auth/me", "garbage", "garbage") == Allow()


class TestProtected:
    def test_no_cookie_redirects_to_entry(self, settings, codec):
        assert _gate(settings, codec).evaluate("/dashboard", None, None) == Redirect("/")

    def test_invalid_cookie_redirects(self, settings, codec):
        assert _gate(settings, codec).evaluate("/dashboard", "garbage", None) == Redirect("/")

    def test_expired_cookie_redirects(self, settings, codec, student):
        token = codec.encode(student, timestamp=now_ms() - 31 * 24 * 60 * 60 * 1000)
        assert _gate(settings, codec).evaluate("/dashboard", token, None) == Redirect("/")

    def test_valid_cookie_allows_with_identity_headers(self, settings, codec, user_token):
        decision = _gate(settings, codec).evaluate("/dashboard", user_token, None)

        assert isinstance(decision, Allow)
        assert decision.headers["x-user-id"] == "user-123"
        assert decision.headers["x-user-role"] == "student"
        assert decision.headers["x-subscription-status"] == "trial"


class TestAdmin:
    def test_requires_admin_cookie(self, settings, codec, user_token):
        assert _gate(settings, codec).evaluate("/admin/plans", user_token, None) == Redirect("/")

    def test_student_token_in_admin_cookie(self, settings, codec, user_token):
        assert _gate(settings, codec).evaluate("/admin", None, user_token) == Redirect("/")

    def test_admin_allowed(self, settings, codec, admin_token):
        decision = _gate(settings, codec).evaluate("/admin/plans", None, admin_token)
        assert isinstance(decision, Allow)
        assert decision.headers["x-user-role"] == "admin"

    def test_admin_cookie_expires_after_one_day(self, settings, codec, admin_identity):
        token = codec.encode(admin_identity, timestamp=now_ms() - ADMIN_SESSION_MAX_AGE_MS - 1000)
        assert _gate(settings, codec).evaluate("/admin", None, token) == Redirect("/")


class TestPremium:
    def test_trial_in_window_allowed(self, settings, codec, user_token):
        decision = _gate(settings, codec, user=_user()).evaluate("/search", user_token, None)
        assert isinstance(decision, Allow)

    def test_trial_ended_redirects_to_payment(self, settings, codec, user_token):
        gate = _gate(settings, codec, user=_user(trial_end=NOW - timedelta(seconds=1)))
        assert gate.evaluate("/search", user_token, None) == Redirect("/payment")

    def test_expired_status_with_ended_trial(self, settings, codec, user_token):
        gate = _gate(settings, codec, user=_user(status="expired", trial_end=NOW - timedelta(days=1)))
        assert gate.evaluate("/quiz", user_token, None) == Redirect("/payment")

    def test_active_subscription_uses_fresh_status(self, settings, codec, user_token):
        """The stored row wins over the stale claim in the cookie."""
        gate = _gate(settings, codec, user=_user(status="active", trial_end=NOW - timedelta(days=30)))

        decision = gate.evaluate("/flashcards", user_token, None)

        assert isinstance(decision, Allow)
        assert decision.headers["x-subscription-status"] == "active"

    def test_expired_without_trial_date_redirects_to_payment(self, settings, codec, user_token):
        gate = _gate(settings, codec, user=_user(status="expired", trial_end=None))
        assert gate.evaluate("/search", user_token, None) == Redirect("/payment")

    def test_stale_active_claim_does_not_grant_access(self, settings, codec):
        token = codec.encode(
            AuthenticatedUser(id="user-123", subscription_status=SubscriptionStatus.ACTIVE)
        )
        gate = _gate(settings, codec, user=_user(status="expired", trial_end=NOW - timedelta(days=1)))
        assert gate.evaluate("/search", token, None) == Redirect("/payment")

    def test_missing_user_redirects_to_entry(self, settings, codec, user_token):
        assert _gate(settings, codec, user=None).evaluate("/search", user_token, None) == Redirect("/")

    def test_store_failure_is_gate_error(self, settings, codec, user_token):
        repo = MagicMock()
        repo.get_by_id.side_effect = RuntimeError("connection reset")
        decision = _gate(settings, codec, users_factory=lambda: repo).evaluate("/search", user_token, None)
        assert isinstance(decision, GateError)

    def test_no_store_is_gate_error(self, settings, codec, user_token):
        decision = _gate(settings, codec, users_factory=None).evaluate("/search", user_token, None)
        assert isinstance(decision, GateError)

    def test_premium_without_cookie_redirects_to_entry(self, settings, codec):
        assert _gate(settings, codec, user=_user()).evaluate("/search", None, None) == Redirect("/")


class TestResolveDecision:
    def test_gate_error_fails_open(self):
        assert resolve_decision(GateError("db down"), "/search") == Allow()

    def test_other_decisions_unchanged(self):
        assert resolve_decision(Redirect("/payment"), "/search") == Redirect("/payment")
        allow = Allow({"x-user-id": "u1"})
        assert resolve_decision(allow, "/dashboard") is allow
