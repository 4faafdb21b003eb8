"""
Billing service implementation.

Creates Mercado Pago checkout preferences for subscription plans and
applies payment notifications to transactions and user subscriptions.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from modules.auth.exceptions import UserNotFoundError
from modules.auth.repository import UserRepository
from shared.config import Settings
from shared.models import SubscriptionStatus

from .client import MercadoPagoClient
from .exceptions import PlanNotFoundError
from .interfaces import IBillingService
from .models import (
    DEFAULT_PLANS,
    ExternalReference,
    Plan,
    PreferenceResult,
    TransactionStatus,
    WebhookResult,
    find_plan,
)
from .repository import TransactionRepository

logger = logging.getLogger(__name__)

PREFERENCE_TTL = timedelta(hours=24)

_STATUS_MAP = {
    "approved": TransactionStatus.COMPLETED,
    "rejected": TransactionStatus.FAILED,
    "cancelled": TransactionStatus.FAILED,
}


def map_payment_status(provider_status: Optional[str]) -> TransactionStatus:
    """Provider payment status to our transaction status; unknown means pending."""
    return _STATUS_MAP.get(provider_status or "", TransactionStatus.PENDING)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BillingService(IBillingService):
    """
    Implementation of the billing service.

    Args:
        settings: Application settings (site URL for callbacks)
        users: Repository for the users table
        transactions: Repository for the transactions table
        client: Mercado Pago REST client
        clock: Returns the current UTC time (overridable in tests)
    """

    def __init__(
        self,
        settings: Settings,
        users: UserRepository,
        transactions: TransactionRepository,
        client: MercadoPagoClient,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._settings = settings
        self._users = users
        self._transactions = transactions
        self._client = client
        self._clock = clock

    def list_plans(self) -> list[Plan]:
        return list(DEFAULT_PLANS)

    async def create_preference(self, plan_id: str, user_id: str) -> PreferenceResult:
        plan = find_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(plan_id)

        user = self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        now = self._clock()
        reference = ExternalReference.build(user.id, plan.id, int(now.timestamp() * 1000))
        body = self._preference_body(plan, user.email or "", user.name, reference, now)

        preference = await self._client.create_preference(body)
        preference_id = str(preference.get("id", ""))
        logger.info("Created preference %s for user %s plan %s", preference_id, user.id, plan.id)

        try:
            self._transactions.create(
                {
                    "user_id": user.id,
                    "plan_id": plan.id,
                    "amount": float(plan.price),
                    "currency": "BRL",
                    "status": TransactionStatus.PENDING.value,
                    "payment_method": "mercadopago",
                    "external_reference": reference,
                    "preference_id": preference_id,
                    "metadata": {"plan_name": plan.name, "plan_duration": plan.duration.value},
                }
            )
        except Exception:
            logger.exception("Failed to store pending transaction for preference %s", preference_id)

        return PreferenceResult(
            preference_id=preference_id,
            init_point=preference.get("init_point", ""),
            sandbox_init_point=preference.get("sandbox_init_point"),
            plan=plan,
        )

    async def process_webhook(
        self,
        notification_type: Optional[str],
        payment_id: Optional[str],
    ) -> WebhookResult:
        if notification_type != "payment":
            return WebhookResult(success=True, message="Notification type not handled")
        if not payment_id:
            return WebhookResult(success=False, message="Payment ID not found")
        if not payment_id.isdigit():
            logger.warning("Rejecting non-numeric payment id %r", payment_id[:40])
            return WebhookResult(success=False, message="Invalid payment ID")

        payment = await self._client.get_payment(payment_id)
        reference = ExternalReference.parse(payment.get("external_reference") or "")
        if reference is None:
            logger.error("Payment %s has no usable external reference", payment_id)
            return WebhookResult(success=False, message="External reference not found")

        existing = self._transactions.get_by_payment_id(payment_id)
        if existing is not None and existing.status != TransactionStatus.PENDING:
            logger.info("Payment %s already processed as %s", payment_id, existing.status.value)
            return WebhookResult(
                success=True,
                message="Payment already processed",
                status=existing.status,
            )

        transaction = existing or self._transactions.get_latest_pending(
            reference.user_id, reference.plan_id
        )
        if transaction is None:
            logger.error(
                "No pending transaction for user %s plan %s", reference.user_id, reference.plan_id
            )
            return WebhookResult(success=False, message="Transaction not found")

        status = map_payment_status(payment.get("status"))
        now = self._clock()
        self._transactions.update(
            transaction.id,
            {
                "status": status.value,
                "payment_id": str(payment_id),
                "payment_status": payment.get("status"),
                "payment_method_details": {
                    "payment_method_id": payment.get("payment_method_id"),
                    "payment_type_id": payment.get("payment_type_id"),
                    "issuer_id": payment.get("issuer_id"),
                },
                "processed_at": now.isoformat(),
            },
        )

        if status == TransactionStatus.COMPLETED:
            self._activate_subscription(reference, now)

        return WebhookResult(success=True, message="Webhook processed successfully", status=status)

    def _activate_subscription(self, reference: ExternalReference, now: datetime) -> None:
        plan = find_plan(reference.plan_id)
        if plan is None:
            logger.error("Approved payment references unknown plan %s", reference.plan_id)
            return

        self._users.update(
            reference.user_id,
            {
                "subscription_status": SubscriptionStatus.ACTIVE.value,
                "subscription_plan": plan.id,
                "subscription_start_date": now.isoformat(),
                "subscription_end_date": (now + timedelta(days=plan.duration_days)).isoformat(),
                "is_trial_expired": False,
            },
        )
        logger.info("User %s subscription activated with plan %s", reference.user_id, plan.id)

    def _preference_body(
        self,
        plan: Plan,
        email: str,
        name: str,
        reference: str,
        now: datetime,
    ) -> dict[str, Any]:
        site = self._settings.site_url.rstrip("/")
        return {
            "items": [
                {
                    "id": plan.id,
                    "title": plan.name,
                    "description": plan.description,
                    "quantity": 1,
                    "unit_price": float(plan.price),
                    "currency_id": "BRL",
                }
            ],
            "payer": {"email": email, "name": name},
            "external_reference": reference,
            "notification_url": f"{site}/api/webhooks/mercadopago",
            "back_urls": {
                "success": f"{site}/payment/success",
                "failure": f"{site}/payment/failure",
                "pending": f"{site}/payment/pending",
            },
            "auto_return": "approved",
            "payment_methods": {
                "excluded_payment_methods": [],
                "excluded_payment_types": [],
                "installments": plan.max_installments,
            },
            "expires": True,
            "expiration_date_from": now.isoformat(),
            "expiration_date_to": (now + PREFERENCE_TTL).isoformat(),
        }
