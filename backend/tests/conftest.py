"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import pytest

from api.dependencies import ServiceContainer, reset_container, set_container
from modules.sessions import SessionCodec
from shared.config import Settings, get_settings
from shared.database import reset_client_cache
from shared.models import AuthenticatedUser, SubscriptionStatus, UserRole


TEST_SESSION_SECRET = "test-session-secret-for-testing-only"
FIXED_NOW = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        session_secret=TEST_SESSION_SECRET,
        debug=True,
        supabase_url="",
        supabase_service_role_key="",
        wasender_api_key="",
        mercadopago_access_token="",
        openai_api_key="",
        admin_email="admin@estudar.pro",
        admin_password="s3nha-forte",
        site_url="https://estudar.pro",
    )


@pytest.fixture
def codec() -> SessionCodec:
    return SessionCodec(TEST_SESSION_SECRET)


@pytest.fixture
def container(settings: Settings) -> ServiceContainer:
    """Container wired from the test settings and installed globally."""
    container = ServiceContainer(settings)
    set_container(container)
    return container


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the container, cached settings and database client around each test."""
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()
    yield
    reset_container()
    reset_client_cache()
    get_settings.cache_clear()


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_NOW


@pytest.fixture
def make_user_row() -> Callable[..., dict[str, Any]]:
    """Factory for users-table rows as Supabase returns them."""

    def _make(**overrides: Any) -> dict[str, Any]:
        row = {
            "id": "user-123",
            "name": "Maria Silva",
            "phone": "+5511987654321",
            "email": "maria@example.com",
            "role": "student",
            "subscription_status": "trial",
            "subscription_plan": None,
            "subscription_end_date": None,
            "trial_start_date": FIXED_NOW.isoformat(),
            "trial_end_date": (FIXED_NOW + timedelta(days=3)).isoformat(),
            "is_trial_expired": False,
            "is_verified": True,
            "stats": {},
            "last_login": None,
            "created_at": FIXED_NOW.isoformat(),
        }
        row.update(overrides)
        return row

    return _make


@pytest.fixture
def student() -> AuthenticatedUser:
    return AuthenticatedUser(
        id="user-123",
        name="Maria Silva",
        phone="+5511987654321",
        role=UserRole.STUDENT,
        subscription_status=SubscriptionStatus.TRIAL,
        trial_end_date=FIXED_NOW + timedelta(days=3),
    )


@pytest.fixture
def admin_identity() -> AuthenticatedUser:
    return AuthenticatedUser(
        id="admin",
        name="Administrador",
        role=UserRole.ADMIN,
        subscription_status=SubscriptionStatus.ACTIVE,
    )


@pytest.fixture
def user_token(codec: SessionCodec, student: AuthenticatedUser) -> str:
    return codec.encode(student)


@pytest.fixture
def admin_token(codec: SessionCodec, admin_identity: AuthenticatedUser) -> str:
    return codec.encode(admin_identity)


# -----------------------------------------------------------------------------
# In-memory stand-ins for the auth tables and the WhatsApp gateway
# -----------------------------------------------------------------------------


class MutableClock:
    """A clock tests can move forward."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: Any) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryUsers:
    """Mirrors UserRepository over a dict of rows."""

    def __init__(self):
        self.rows: dict[str, dict[str, Any]] = {}
        self._seq = 0

    def _to_user(self, row):
        from modules.auth.models import User

        data = dict(row)
        if not data.get("stats"):
            data.pop("stats", None)
        return User.model_validate(data)

    def add(self, row: dict[str, Any]):
        self.rows[row["id"]] = dict(row)
        return self._to_user(row)

    def get_by_id(self, user_id):
        row = self.rows.get(user_id)
        return self._to_user(row) if row else None

    def get_by_phone(self, phone):
        row = next((r for r in self.rows.values() if r.get("phone") == phone), None)
        return self._to_user(row) if row else None

    def get_by_email(self, email):
        row = next((r for r in self.rows.values() if r.get("email") == email), None)
        return self._to_user(row) if row else None

    def find_by_phone_or_email(self, phone, email):
        return [
            self._to_user(r)
            for r in self.rows.values()
            if r.get("phone") == phone or r.get("email") == email
        ]

    def create(self, data):
        self._seq += 1
        row = {"id": f"user-{self._seq}", "created_at": FIXED_NOW.isoformat(), **data}
        self.rows[row["id"]] = row
        return self._to_user(row)

    def update(self, user_id, data):
        if user_id not in self.rows:
            return None
        self.rows[user_id].update(data)
        return self._to_user(self.rows[user_id])

    def record_login(self, user_id):
        return self.update(user_id, {"last_login": FIXED_NOW.isoformat(), "is_verified": True})

    def email_in_use_by_other(self, email, user_id):
        return any(r.get("email") == email and r["id"] != user_id for r in self.rows.values())

    def phone_in_use_by_other(self, phone, user_id):
        return any(r.get("phone") == phone and r["id"] != user_id for r in self.rows.values())


class InMemoryVerifications:
    """Mirrors VerificationRepository over a dict of challenges."""

    def __init__(self):
        self.rows: dict[str, Any] = {}
        self._seq = 0

    def create(self, phone, code, name, purpose, expires_at, user_id=None):
        from modules.auth.models import VerificationSession

        self._seq += 1
        challenge = VerificationSession(
            id=f"ver-{self._seq}",
            phone=phone,
            code=code,
            name=name,
            purpose=purpose,
            user_id=user_id,
            expires_at=expires_at,
            created_at=FIXED_NOW + timedelta(milliseconds=self._seq),
        )
        self.rows[challenge.id] = challenge
        return challenge

    def get_by_id(self, verification_id):
        return self.rows.get(verification_id)

    def get_latest_active(self, phone, purpose, now):
        candidates = [
            c
            for c in self.rows.values()
            if c.phone == phone and c.purpose == purpose and not c.is_verified and c.expires_at > now
        ]
        return max(candidates, key=lambda c: c.created_at) if candidates else None

    def consume(self, verification_id):
        challenge = self.rows.get(verification_id)
        if challenge is None or challenge.is_verified:
            return False
        self.rows[verification_id] = challenge.model_copy(update={"is_verified": True})
        return True

    def latest(self):
        return max(self.rows.values(), key=lambda c: c.created_at)


class RecordingGateway:
    """Captures sent messages; set ``fail`` to simulate an outage."""

    def __init__(self):
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    async def send_message(self, phone, text):
        from modules.messaging import MessageDeliveryError, MessageReceipt

        if self.fail:
            raise MessageDeliveryError("gateway down", status_code=503)
        self.sent.append((phone, text))
        return MessageReceipt(to=phone.lstrip("+"), message_id=str(len(self.sent)))

    async def check_status(self):
        return not self.fail


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock()


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers()


@pytest.fixture
def verifications() -> InMemoryVerifications:
    return InMemoryVerifications()


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def auth_service(settings, users, verifications, gateway, codec, clock):
    from modules.auth.service import AuthService

    return AuthService(
        settings=settings,
        users=users,
        verifications=verifications,
        gateway=gateway,
        codec=codec,
        clock=clock,
    )
