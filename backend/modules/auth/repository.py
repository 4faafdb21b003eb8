"""
User and verification repositories.

Encapsulates all Supabase queries and data mapping for the auth tables:
- users
- verification_sessions
"""

from datetime import datetime
from typing import Any, Optional

from shared.repository import BaseRepository
from .models import User, VerificationPurpose, VerificationSession


class UserRepository(BaseRepository[User]):
    """
    Repository for the users table.

    Note: This repository does NOT perform authorization checks.
    The service layer decides who may read or change which row.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        result = self._db.table("users").select("*").eq("id", user_id).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def get_by_phone(self, phone: str) -> Optional[User]:
        result = self._db.table("users").select("*").eq("phone", phone).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        result = self._db.table("users").select("*").eq("email", email).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def find_by_phone_or_email(self, phone: str, email: str) -> list[User]:
        """Return every user holding either the phone or the email."""
        result = (
            self._db.table("users")
            .select("*")
            .or_(f"phone.eq.{self._quote(phone)},email.eq.{self._quote(email)}")
            .execute()
        )
        return [self._map_to_user(row) for row in result.data or []]

    def create(self, data: dict[str, Any]) -> User:
        """
        Insert a new user row.

        Args:
            data: Column values (name, phone, email, role, trial dates...)

        Returns:
            The created User with generated ID and timestamps.
        """
        result = self._db.table("users").insert(data).execute()
        return self._map_to_user(result.data[0])

    def update(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        """Apply a partial update; returns the updated user or None if missing."""
        payload = {**data, "updated_at": self._now_iso()}
        result = self._db.table("users").update(payload).eq("id", user_id).execute()
        row = self._first(result.data)
        return self._map_to_user(row) if row else None

    def record_login(self, user_id: str) -> Optional[User]:
        return self.update(user_id, {"last_login": self._now_iso(), "is_verified": True})

    def email_in_use_by_other(self, email: str, user_id: str) -> bool:
        result = (
            self._db.table("users")
            .select("id")
            .eq("email", email)
            .neq("id", user_id)
            .limit(1)
            .execute()
        )
        return bool(result.data)

    def phone_in_use_by_other(self, phone: str, user_id: str) -> bool:
        result = (
            self._db.table("users")
            .select("id")
            .eq("phone", phone)
            .neq("id", user_id)
            .limit(1)
            .execute()
        )
        return bool(result.data)

    # -------------------------------------------------------------------------
    # Mapping helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _map_to_user(row: dict[str, Any]) -> User:
        data = dict(row)
        if not data.get("stats"):
            data.pop("stats", None)
        return User.model_validate(data).refresh_trial_state()


class VerificationRepository(BaseRepository[VerificationSession]):
    """
    Repository for the verification_sessions table.

    Challenges are never deleted here; consumed ones keep ``is_verified`` set
    and expired ones are simply ignored by the lookups.
    """

    def create(
        self,
        phone: str,
        code: str,
        name: str,
        purpose: VerificationPurpose,
        expires_at: datetime,
        user_id: Optional[str] = None,
    ) -> VerificationSession:
        data = {
            "phone": phone,
            "code": code,
            "name": name,
            "purpose": purpose.value,
            "user_id": user_id,
            "expires_at": expires_at.isoformat(),
            "is_verified": False,
        }
        result = self._db.table("verification_sessions").insert(data).execute()
        return VerificationSession.model_validate(result.data[0])

    def get_by_id(self, verification_id: str) -> Optional[VerificationSession]:
        result = (
            self._db.table("verification_sessions")
            .select("*")
            .eq("id", verification_id)
            .execute()
        )
        row = self._first(result.data)
        return VerificationSession.model_validate(row) if row else None

    def get_latest_active(
        self,
        phone: str,
        purpose: VerificationPurpose,
        now: datetime,
    ) -> Optional[VerificationSession]:
        """
        Most recent unexpired, unconsumed challenge for a phone.

        Older challenges for the same phone are superseded by this one.
        """
        result = (
            self._db.table("verification_sessions")
            .select("*")
            .eq("phone", phone)
            .eq("purpose", purpose.value)
            .eq("is_verified", False)
            .gt("expires_at", now.isoformat())
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        row = self._first(result.data)
        return VerificationSession.model_validate(row) if row else None

    def consume(self, verification_id: str) -> bool:
        """
        Mark a challenge verified.

        The update is conditional on the row still being unverified, so of two
        concurrent verifications only one sees a row come back.
        """
        result = (
            self._db.table("verification_sessions")
            .update({"is_verified": True})
            .eq("id", verification_id)
            .eq("is_verified", False)
            .execute()
        )
        return bool(result.data)
