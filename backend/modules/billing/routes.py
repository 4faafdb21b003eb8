"""
Payment API endpoints.

Checkout preference creation and the Mercado Pago notification webhook.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from api.dependencies import get_billing_service
from api.middleware.auth import require_user
from shared.exceptions import NotFoundError
from shared.models import AuthenticatedUser

from .exceptions import PaymentProviderError
from .interfaces import IBillingService
from .models import CreatePreferenceRequest

logger = logging.getLogger(__name__)

payment_router = APIRouter()
webhook_router = APIRouter()


@payment_router.get("/create-preference")
async def list_plans(service: IBillingService = Depends(get_billing_service)) -> dict:
    """Available subscription plans."""
    return {
        "success": True,
        "plans": [plan.model_dump(mode="json") for plan in service.list_plans()],
    }


@payment_router.post("/create-preference")
async def create_preference(
    request: CreatePreferenceRequest,
    user: AuthenticatedUser = Depends(require_user),
    service: IBillingService = Depends(get_billing_service),
) -> dict:
    """Start a checkout for the logged-in user."""
    try:
        result = await service.create_preference(request.plan_id, user.id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PaymentProviderError as e:
        logger.error("Preference creation failed: %s", e.message)
        raise HTTPException(status_code=500, detail="Falha ao criar preferência de pagamento")

    return {
        "success": True,
        "preferenceId": result.preference_id,
        "initPoint": result.init_point,
        "plan": result.plan.summary(),
    }


@webhook_router.get("/mercadopago")
async def webhook_status() -> dict:
    return {"success": True, "message": "MercadoPago webhook endpoint is active"}


@webhook_router.post("/mercadopago")
async def mercadopago_webhook(
    request: Request,
    body: Optional[dict[str, Any]] = Body(default=None),
    service: IBillingService = Depends(get_billing_service),
) -> dict:
    """
    Receive a Mercado Pago notification.

    The notification type and payment ID come from the JSON body, falling
    back to the ``type``/``topic`` and ``data.id``/``id`` query parameters.
    """
    body = body or {}
    params = request.query_params
    data = body.get("data") if isinstance(body.get("data"), dict) else {}

    notification_type = body.get("type") or params.get("type") or params.get("topic")
    payment_id = data.get("id") or params.get("data.id") or params.get("id")

    try:
        result = await service.process_webhook(
            notification_type, str(payment_id) if payment_id else None
        )
    except PaymentProviderError as e:
        logger.error("Webhook processing failed: %s", e.message)
        raise HTTPException(status_code=500, detail="Error processing webhook")

    return result.model_dump(mode="json", exclude_none=True)
