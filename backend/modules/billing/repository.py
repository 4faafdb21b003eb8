"""
Transaction repository for database access.

Encapsulates all Supabase queries and data mapping for the transactions table.
"""

from typing import Any, Optional

from shared.repository import BaseRepository
from .models import Transaction, TransactionStatus


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for payment transactions."""

    def create(self, data: dict[str, Any]) -> Transaction:
        result = self._db.table("transactions").insert(data).execute()
        return Transaction.model_validate(result.data[0])

    def get_by_payment_id(self, payment_id: str) -> Optional[Transaction]:
        """The transaction already bound to a provider payment, if any."""
        result = (
            self._db.table("transactions")
            .select("*")
            .eq("payment_id", payment_id)
            .limit(1)
            .execute()
        )
        row = self._first(result.data)
        return Transaction.model_validate(row) if row else None

    def get_latest_pending(self, user_id: str, plan_id: str) -> Optional[Transaction]:
        result = (
            self._db.table("transactions")
            .select("*")
            .eq("user_id", user_id)
            .eq("plan_id", plan_id)
            .eq("status", TransactionStatus.PENDING.value)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )
        row = self._first(result.data)
        return Transaction.model_validate(row) if row else None

    def update(self, transaction_id: str, data: dict[str, Any]) -> None:
        self._db.table("transactions").update(data).eq("id", transaction_id).execute()
