"""
Billing module.

Handles Mercado Pago checkout and subscription activation.

Public API:
- IBillingService: Interface for billing operations
- Plan, Transaction: Billing models
- has_premium_access, is_trial_expired: Subscription access rules
- Billing exceptions: PlanNotFoundError, PaymentProviderError
"""

from .interfaces import IBillingService
from .models import (
    DEFAULT_PLANS,
    ExternalReference,
    Plan,
    PlanDuration,
    PreferenceResult,
    Transaction,
    TransactionStatus,
    WebhookResult,
    find_plan,
)
from .subscription import has_premium_access, is_trial_expired
from .exceptions import PlanNotFoundError, PaymentProviderError

__all__ = [
    # Interface
    "IBillingService",
    # Models
    "DEFAULT_PLANS",
    "ExternalReference",
    "Plan",
    "PlanDuration",
    "PreferenceResult",
    "Transaction",
    "TransactionStatus",
    "WebhookResult",
    "find_plan",
    # Subscription rules
    "has_premium_access",
    "is_trial_expired",
    # Exceptions
    "PlanNotFoundError",
    "PaymentProviderError",
]
