"""Tests for modules/sessions/codec.py."""

import base64
import json
from datetime import datetime, timezone

import pytest

from modules.sessions import (
    ADMIN_SESSION_MAX_AGE_MS,
    USER_SESSION_MAX_AGE_MS,
    MalformedTokenError,
    SessionCodec,
    create_session_codec,
    is_expired,
    now_ms,
)
from shared.config import Settings
from shared.exceptions import ConfigurationError
from shared.models import SubscriptionStatus, UserRole


def _tamper_payload(token: str, **changes) -> str:
    header, payload, signature = token.split(".")
    padded = payload + "=" * (-len(payload) % 4)
    data = json.loads(base64.urlsafe_b64decode(padded))
    data.update(changes)
    new_payload = base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()
    return f"{header}.{new_payload}.{signature}"


class TestEncodeDecode:
    def test_round_trip_preserves_identity(self, codec, student):
        record = codec.decode(codec.encode(student))

        assert record.user_id == student.id
        assert record.name == student.name
        assert record.phone == student.phone
        assert record.role == UserRole.STUDENT
        assert record.subscription_status == SubscriptionStatus.TRIAL
        assert record.trial_end_date == student.trial_end_date

    def test_payload_uses_camel_case_keys(self, codec, student):
        token = codec.encode(student, timestamp=1_700_000_000_000)
        payload = token.split(".")[1]
        data = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))

        assert data["userId"] == "user-123"
        assert data["subscriptionStatus"] == "trial"
        assert "trialEndDate" in data
        assert data["timestamp"] == 1_700_000_000_000

    def test_encode_stamps_current_time(self, codec, student):
        before = now_ms()
        record = codec.decode(codec.encode(student))
        assert before <= record.timestamp <= now_ms()

    def test_to_user_returns_identity(self, codec, admin_identity):
        record = codec.decode(codec.encode(admin_identity))
        assert record.is_admin
        assert record.to_user() == admin_identity


class TestTampering:
    def test_rejects_modified_payload(self, codec, student):
        token = _tamper_payload(codec.encode(student), role="admin")
        with pytest.raises(MalformedTokenError):
            codec.decode(token)

    def test_rejects_token_signed_with_other_secret(self, student):
        token = SessionCodec("another-secret").encode(student)
        with pytest.raises(MalformedTokenError):
            SessionCodec("the-real-secret").decode(token)

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "not-base64!!"])
    def test_rejects_garbage(self, codec, token):
        with pytest.raises(MalformedTokenError):
            codec.decode(token)

    def test_rejects_payload_without_user_id(self, codec):
        import jwt

        token = jwt.encode({"timestamp": now_ms()}, "test-session-secret-for-testing-only", algorithm="HS256")
        with pytest.raises(MalformedTokenError):
            codec.decode(token)


class TestExpiry:
    def test_fresh_token_not_expired(self, codec, student):
        record = codec.decode(codec.encode(student))
        assert not is_expired(record, USER_SESSION_MAX_AGE_MS)

    def test_expired_exactly_after_max_age(self, codec, student):
        issued = 1_000_000
        record = codec.decode(codec.encode(student, timestamp=issued))

        assert not is_expired(record, 1000, now=issued + 1000)
        assert is_expired(record, 1000, now=issued + 1001)

    def test_admin_window_is_one_day(self):
        assert ADMIN_SESSION_MAX_AGE_MS == 24 * 60 * 60 * 1000
        assert USER_SESSION_MAX_AGE_MS == 30 * ADMIN_SESSION_MAX_AGE_MS


class TestRead:
    def test_valid_token(self, codec, user_token):
        record = codec.read(user_token, USER_SESSION_MAX_AGE_MS)
        assert record is not None
        assert record.user_id == "user-123"

    def test_missing_token(self, codec):
        assert codec.read(None, USER_SESSION_MAX_AGE_MS) is None
        assert codec.read("", USER_SESSION_MAX_AGE_MS) is None

    def test_malformed_token(self, codec):
        assert codec.read("garbage", USER_SESSION_MAX_AGE_MS) is None

    def test_expired_token(self, codec, student):
        issued = now_ms() - ADMIN_SESSION_MAX_AGE_MS - 1000
        token = codec.encode(student, timestamp=issued)

        assert codec.read(token, ADMIN_SESSION_MAX_AGE_MS) is None
        assert codec.read(token, USER_SESSION_MAX_AGE_MS) is not None


class TestCreateSessionCodec:
    def test_empty_secret_rejected(self):
        with pytest.raises(ConfigurationError):
            SessionCodec("")

    def test_uses_configured_secret(self, student):
        codec = create_session_codec(Settings(_env_file=None, session_secret="abc"))
        token = codec.encode(student)
        assert SessionCodec("abc").decode(token).user_id == student.id

    def test_debug_falls_back_to_dev_secret(self):
        codec = create_session_codec(Settings(_env_file=None, session_secret="", debug=True))
        assert isinstance(codec, SessionCodec)

    def test_missing_secret_outside_debug_fails(self):
        with pytest.raises(ConfigurationError):
            create_session_codec(Settings(_env_file=None, session_secret="", debug=False))
