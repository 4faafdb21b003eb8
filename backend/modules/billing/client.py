"""
Mercado Pago REST client.

Only the two calls the checkout flow needs: creating a preference and
reading a payment back when a notification arrives.
"""

import logging
from typing import Any, Optional

import httpx

from .exceptions import PaymentProviderError

logger = logging.getLogger(__name__)


class MercadoPagoClient:
    """Thin async wrapper over the Mercado Pago REST API."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.mercadopago.com",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def configured(self) -> bool:
        return bool(self._access_token)

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "Content-Type": "application/json",
            },
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        if not self.configured:
            raise PaymentProviderError("Mercado Pago access token not configured")

        try:
            async with self._client() as client:
                resp = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("Mercado Pago %s %s failed: %s", method, path, e)
            raise PaymentProviderError("Could not reach Mercado Pago")

        if resp.status_code >= 400:
            logger.error(
                "Mercado Pago %s %s returned %s: %s",
                method,
                path,
                resp.status_code,
                resp.text[:200],
            )
            raise PaymentProviderError(
                f"Mercado Pago error: {resp.status_code}",
                status_code=resp.status_code,
            )
        try:
            return resp.json()
        except ValueError:
            logger.error("Mercado Pago %s %s returned a non-JSON body", method, path)
            raise PaymentProviderError("Invalid response from Mercado Pago")

    async def create_preference(self, body: dict[str, Any]) -> dict[str, Any]:
        """POST /checkout/preferences; returns the created preference."""
        return await self._request("POST", "/checkout/preferences", json=body)

    async def get_payment(self, payment_id: str) -> dict[str, Any]:
        """GET /v1/payments/{id}."""
        return await self._request("GET", f"/v1/payments/{payment_id}")
