"""
Billing module data models.

These models define the subscription plans, payment transactions and
the results the billing service hands back to routes.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class PlanDuration(str, Enum):
    """Billing periods a plan can have."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class TransactionStatus(str, Enum):
    """Lifecycle of a payment transaction."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"


class Plan(BaseModel):
    """A purchasable subscription plan."""

    id: str = Field(..., description="Plan ID (monthly, yearly)")
    name: str = Field(..., description="Display name")
    description: str = Field(..., description="Short description")
    price: Decimal = Field(..., description="Price in BRL")
    duration: PlanDuration = Field(..., description="Billing period")
    features: list[str] = Field(default_factory=list)

    @property
    def duration_days(self) -> int:
        return 365 if self.duration == PlanDuration.YEARLY else 30

    @property
    def max_installments(self) -> int:
        return 12 if self.duration == PlanDuration.YEARLY else 1

    def summary(self) -> dict[str, Any]:
        return self.model_dump(mode="json", include={"id", "name", "description", "price", "duration"})


_COMMON_FEATURES = [
    "Acesso a todo conteúdo jurídico",
    "Quiz e simulados ilimitados",
    "Flashcards personalizados",
    "Busca avançada com IA",
    "Suporte via WhatsApp",
]

DEFAULT_PLANS = [
    Plan(
        id="monthly",
        name="Plano Mensal",
        description="Acesso completo por 30 dias",
        price=Decimal("19.90"),
        duration=PlanDuration.MONTHLY,
        features=list(_COMMON_FEATURES),
    ),
    Plan(
        id="yearly",
        name="Plano Anual",
        description="Acesso completo por 12 meses",
        price=Decimal("199.90"),
        duration=PlanDuration.YEARLY,
        features=[*_COMMON_FEATURES, "2 meses grátis (economia de R$ 39,80)"],
    ),
]


def find_plan(plan_id: str) -> Optional[Plan]:
    """Look up one of the default plans by ID."""
    return next((plan for plan in DEFAULT_PLANS if plan.id == plan_id), None)


class Transaction(BaseModel):
    """
    A payment transaction record.

    Created as ``pending`` when a checkout preference is issued and moved to
    ``completed`` or ``failed`` by the payment webhook.
    """

    id: str = Field(..., description="Transaction ID (UUID)")
    user_id: str = Field(..., description="User ID")
    plan_id: str = Field(..., description="Plan ID")
    amount: Decimal = Field(..., description="Amount charged in BRL")
    currency: str = Field(default="BRL")
    status: TransactionStatus = Field(default=TransactionStatus.PENDING)
    payment_method: str = Field(default="mercadopago")
    external_reference: Optional[str] = None
    preference_id: Optional[str] = None
    payment_id: Optional[str] = None
    payment_status: Optional[str] = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    processed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class ExternalReference(BaseModel):
    """Parsed ``<user_id>_<plan_id>_<ms>`` reference attached to a preference."""

    user_id: str
    plan_id: str
    issued_at_ms: Optional[int] = None

    @classmethod
    def build(cls, user_id: str, plan_id: str, issued_at_ms: int) -> str:
        return f"{user_id}_{plan_id}_{issued_at_ms}"

    @classmethod
    def parse(cls, value: str) -> Optional["ExternalReference"]:
        parts = (value or "").split("_")
        if len(parts) < 2 or not parts[0] or not parts[1]:
            return None
        issued = int(parts[2]) if len(parts) > 2 and parts[2].isdigit() else None
        return cls(user_id=parts[0], plan_id=parts[1], issued_at_ms=issued)


class PreferenceResult(BaseModel):
    """Returned when a checkout preference is created."""

    preference_id: str
    init_point: str
    sandbox_init_point: Optional[str] = None
    plan: Plan


class WebhookResult(BaseModel):
    """Outcome of handling a payment notification."""

    success: bool
    message: str
    status: Optional[TransactionStatus] = None


class CreatePreferenceRequest(BaseModel):
    """Request to start a checkout for a plan."""

    plan_id: str = Field(..., alias="planId", min_length=1)

    model_config = {"populate_by_name": True}
