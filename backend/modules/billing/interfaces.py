"""
Billing module interface.

Other modules should depend on IBillingService, not the concrete implementation.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import Plan, PreferenceResult, WebhookResult


@runtime_checkable
class IBillingService(Protocol):
    """
    Interface for subscription checkout and payment notifications.
    """

    def list_plans(self) -> list[Plan]:
        """The plans a user can buy."""
        ...

    async def create_preference(self, plan_id: str, user_id: str) -> PreferenceResult:
        """
        Start a Mercado Pago checkout for a plan.

        Args:
            plan_id: Plan to purchase (monthly, yearly)
            user_id: Buyer's user ID

        Returns:
            PreferenceResult with the checkout URL

        Raises:
            PlanNotFoundError: If the plan doesn't exist
            UserNotFoundError: If the user doesn't exist
            PaymentProviderError: If Mercado Pago rejects the request
        """
        ...

    async def process_webhook(
        self,
        notification_type: Optional[str],
        payment_id: Optional[str],
    ) -> WebhookResult:
        """
        Apply a payment notification.

        Redelivered notifications for an already processed payment are
        acknowledged without changing anything.

        Raises:
            PaymentProviderError: If the payment cannot be fetched
        """
        ...
