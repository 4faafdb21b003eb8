"""
Billing module exceptions.

These exceptions are raised by the billing module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Any, Optional

from shared.exceptions import ExternalServiceError, NotFoundError


class PlanNotFoundError(NotFoundError):
    """Raised when a checkout is requested for an unknown plan."""

    def __init__(self, plan_id: str):
        super().__init__(
            "Plano não encontrado",
            code="PLAN_NOT_FOUND",
            details={"plan_id": plan_id},
        )


class PaymentProviderError(ExternalServiceError):
    """Raised when Mercado Pago rejects or fails a request."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            service="mercadopago",
            code="PAYMENT_PROVIDER_ERROR",
            details=details,
        )
        self.status_code = status_code
        if status_code is not None:
            self.details["status_code"] = status_code
