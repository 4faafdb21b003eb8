"""
Authentication service implementation.

Runs the WhatsApp OTP flows (registration and login), admin login and
profile updates. Challenges live in the verification_sessions table and
move NONE -> ISSUED -> VERIFIED; expiry is evaluated lazily at verify time.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from modules.messaging import IMessagingGateway, MessageDeliveryError
from modules.messaging.templates import (
    login_code_message,
    registration_code_message,
    welcome_message,
)
from modules.sessions import (
    ADMIN_SESSION_MAX_AGE_MS,
    USER_SESSION_MAX_AGE_MS,
    SessionCodec,
)
from shared.config import Settings
from shared.exceptions import EstudarError, ValidationError
from shared.models import AuthenticatedUser, SubscriptionStatus, UserRole

from .exceptions import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidOrExpiredCodeError,
    UserNotFoundError,
)
from .interfaces import IAuthService
from .models import (
    IdentityResponse,
    LoginChallenge,
    RegistrationResult,
    SessionResult,
    User,
    UserStats,
    VerificationPurpose,
    VerificationSession,
)
from .otp import generate_code, normalize_phone, validate_code_format
from .repository import UserRepository, VerificationRepository

logger = logging.getLogger(__name__)

ADMIN_USER_ID = "admin"
ADMIN_DISPLAY_NAME = "Administrador"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Args:
        settings: Application settings (OTP windows, trial length, admin creds)
        users: Repository for the users table
        verifications: Repository for the verification_sessions table
        gateway: WhatsApp gateway used to deliver codes
        codec: Session token codec
        clock: Returns the current UTC time (overridable in tests)
    """

    def __init__(
        self,
        settings: Settings,
        users: UserRepository,
        verifications: VerificationRepository,
        gateway: IMessagingGateway,
        codec: SessionCodec,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._settings = settings
        self._users = users
        self._verifications = verifications
        self._gateway = gateway
        self._codec = codec
        self._clock = clock

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    async def register(self, name: str, email: str, phone: str) -> RegistrationResult:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if not name:
            raise ValidationError("Nome é obrigatório", details={"field": "name"})
        if "@" not in email:
            raise ValidationError("Email inválido", details={"field": "email"})
        phone = normalize_phone(phone)

        for existing in self._users.find_by_phone_or_email(phone, email):
            if existing.phone == phone:
                raise DuplicateUserError("phone")
            raise DuplicateUserError("email")

        now = self._clock()
        user = self._users.create(
            {
                "name": name,
                "email": email,
                "phone": phone,
                "role": UserRole.STUDENT.value,
                "subscription_status": SubscriptionStatus.TRIAL.value,
                "trial_start_date": now.isoformat(),
                "trial_end_date": (now + timedelta(days=self._settings.trial_days)).isoformat(),
                "is_trial_expired": False,
                "is_verified": False,
                "stats": UserStats().model_dump(mode="json"),
            }
        )
        logger.info("Registered user %s", user.id)

        ttl = self._settings.registration_code_ttl_minutes
        challenge = self._issue_challenge(phone, name, VerificationPurpose.REGISTRATION, ttl, user.id)
        code_sent = await self._deliver(phone, registration_code_message(name, challenge.code, ttl))
        return RegistrationResult(user=user, verification_id=challenge.id, code_sent=code_sent)

    async def verify_registration(self, phone: str, code: str) -> SessionResult:
        code = validate_code_format(code)
        phone = normalize_phone(phone)

        challenge = self._verifications.get_latest_active(
            phone, VerificationPurpose.REGISTRATION, self._clock()
        )
        if challenge is None or not secrets.compare_digest(challenge.code, code):
            raise InvalidOrExpiredCodeError()
        self._consume(challenge)

        user = self._users.get_by_phone(phone)
        if user is None:
            raise UserNotFoundError(challenge.user_id or phone)
        user = self._users.record_login(user.id) or user

        await self._deliver(phone, welcome_message(user.name, is_new_user=True))
        return self._start_session(user, is_new_user=True)

    # -------------------------------------------------------------------------
    # WhatsApp login
    # -------------------------------------------------------------------------

    async def initiate_login(self, name: str, phone: str) -> LoginChallenge:
        phone = normalize_phone(phone)
        existing = self._users.get_by_phone(phone)
        display_name = existing.name if existing else (name or "").strip()
        if not display_name:
            raise ValidationError("Nome é obrigatório", details={"field": "name"})

        ttl = self._settings.login_code_ttl_minutes
        challenge = self._issue_challenge(
            phone,
            display_name,
            VerificationPurpose.LOGIN,
            ttl,
            existing.id if existing else None,
        )
        text = login_code_message(display_name, challenge.code, ttl, is_new_user=existing is None)
        await self._gateway.send_message(phone, text)

        return LoginChallenge(
            verification_id=challenge.id,
            is_new_user=existing is None,
            message="Código enviado via WhatsApp",
        )

    async def verify_login(self, verification_id: str, code: str) -> SessionResult:
        code = validate_code_format(code)

        challenge = self._verifications.get_by_id(verification_id)
        if (
            challenge is None
            or challenge.purpose != VerificationPurpose.LOGIN
            or not challenge.is_active(self._clock())
            or not secrets.compare_digest(challenge.code, code)
        ):
            raise InvalidOrExpiredCodeError()

        latest = self._verifications.get_latest_active(
            challenge.phone, VerificationPurpose.LOGIN, self._clock()
        )
        if latest is None or latest.id != challenge.id:
            logger.info("Rejected superseded login challenge %s", challenge.id)
            raise InvalidOrExpiredCodeError()
        self._consume(challenge)

        user = self._users.get_by_phone(challenge.phone)
        is_new_user = user is None
        if user is None:
            user = self._create_verified_user(challenge.name, challenge.phone)
        user = self._users.record_login(user.id) or user

        await self._deliver(challenge.phone, welcome_message(user.name, is_new_user))
        return self._start_session(user, is_new_user=is_new_user)

    async def resend_code(
        self,
        phone: str,
        purpose: VerificationPurpose,
        name: Optional[str] = None,
    ) -> LoginChallenge:
        phone = normalize_phone(phone)
        existing = self._users.get_by_phone(phone)

        if purpose == VerificationPurpose.LOGIN:
            return await self.initiate_login(name or "", phone)

        if existing is None:
            raise UserNotFoundError(phone)
        ttl = self._settings.registration_code_ttl_minutes
        challenge = self._issue_challenge(phone, existing.name, purpose, ttl, existing.id)
        await self._gateway.send_message(
            phone, registration_code_message(existing.name, challenge.code, ttl)
        )
        return LoginChallenge(
            verification_id=challenge.id,
            is_new_user=False,
            message="Novo código enviado via WhatsApp",
        )

    # -------------------------------------------------------------------------
    # Sessions and identity
    # -------------------------------------------------------------------------

    async def get_identity(
        self,
        user_token: Optional[str],
        admin_token: Optional[str],
    ) -> IdentityResponse:
        admin = self._codec.read(admin_token, ADMIN_SESSION_MAX_AGE_MS)
        if admin is not None and admin.is_admin:
            return IdentityResponse(
                authenticated=True,
                user=admin.to_user().model_dump(mode="json"),
                provider="admin",
            )

        record = self._codec.read(user_token, USER_SESSION_MAX_AGE_MS)
        if record is None:
            return IdentityResponse(authenticated=False)

        try:
            user = self._users.get_by_id(record.user_id)
        except EstudarError as e:
            logger.warning("Could not refresh user %s from store: %s", record.user_id, e.message)
            return IdentityResponse(
                authenticated=True,
                user=record.to_user().model_dump(mode="json"),
                provider="whatsapp",
            )

        if user is None:
            return IdentityResponse(authenticated=False)
        return IdentityResponse(authenticated=True, user=user.public_dict(), provider="whatsapp")

    async def admin_login(self, email: str, password: str) -> str:
        expected_email = self._settings.admin_email
        expected_password = self._settings.admin_password
        if not expected_email or not expected_password:
            logger.warning("Admin login attempted but admin credentials are not configured")
            raise InvalidCredentialsError()

        email_ok = secrets.compare_digest(email.strip().lower(), expected_email.lower())
        password_ok = secrets.compare_digest(password, expected_password)
        if not (email_ok and password_ok):
            raise InvalidCredentialsError()

        identity = AuthenticatedUser(
            id=ADMIN_USER_ID,
            name=ADMIN_DISPLAY_NAME,
            role=UserRole.ADMIN,
            subscription_status=SubscriptionStatus.ACTIVE,
        )
        logger.info("Admin session issued")
        return self._codec.encode(identity)

    async def update_profile(
        self,
        user_id: str,
        name: str,
        email: str,
        phone: Optional[str] = None,
    ) -> User:
        name = (name or "").strip()
        email = (email or "").strip().lower()
        if len(name) < 2:
            raise ValidationError("Nome deve ter pelo menos 2 caracteres", details={"field": "name"})
        if "@" not in email:
            raise ValidationError("Email inválido", details={"field": "email"})
        if self._users.email_in_use_by_other(email, user_id):
            raise DuplicateUserError("email")

        data = {"name": name, "email": email}
        if phone:
            phone = normalize_phone(phone)
            if self._users.phone_in_use_by_other(phone, user_id):
                raise DuplicateUserError("phone")
            data["phone"] = phone

        user = self._users.update(user_id, data)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _issue_challenge(
        self,
        phone: str,
        name: str,
        purpose: VerificationPurpose,
        ttl_minutes: int,
        user_id: Optional[str],
    ) -> VerificationSession:
        expires_at = self._clock() + timedelta(minutes=ttl_minutes)
        challenge = self._verifications.create(
            phone=phone,
            code=generate_code(),
            name=name,
            purpose=purpose,
            expires_at=expires_at,
            user_id=user_id,
        )
        logger.info("Issued %s challenge %s", purpose.value, challenge.id)
        logger.debug("Challenge %s code %s", challenge.id, challenge.code)
        return challenge

    def _consume(self, challenge: VerificationSession) -> None:
        if not self._verifications.consume(challenge.id):
            # Another request consumed it first
            raise InvalidOrExpiredCodeError()

    def _create_verified_user(self, name: str, phone: str) -> User:
        now = self._clock()
        user = self._users.create(
            {
                "name": name,
                "phone": phone,
                "role": UserRole.STUDENT.value,
                "subscription_status": SubscriptionStatus.TRIAL.value,
                "trial_start_date": now.isoformat(),
                "trial_end_date": (now + timedelta(days=self._settings.trial_days)).isoformat(),
                "is_trial_expired": False,
                "is_verified": True,
                "stats": UserStats().model_dump(mode="json"),
            }
        )
        logger.info("Created user %s on first login", user.id)
        return user

    def _start_session(self, user: User, is_new_user: bool) -> SessionResult:
        user = user.refresh_trial_state(self._clock())
        token = self._codec.encode(user.to_identity())
        return SessionResult(user=user, session_token=token, is_new_user=is_new_user)

    async def _deliver(self, phone: str, text: str) -> bool:
        """Best-effort send; failures are logged, never raised."""
        try:
            await self._gateway.send_message(phone, text)
        except MessageDeliveryError as e:
            logger.error("WhatsApp delivery to %s failed: %s", phone, e.message)
            return False
        return True
