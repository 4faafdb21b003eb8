"""
WhatsApp gateway implementations.

WasenderGateway talks to the WasenderAPI REST endpoints. DisabledGateway
stands in when no API key is configured so the app stays bootable.
"""

import logging
import re
from typing import Optional

import httpx

from shared.config import Settings

from .exceptions import MessageDeliveryError
from .interfaces import IMessagingGateway
from .models import MessageReceipt

logger = logging.getLogger(__name__)


def to_gateway_number(phone: str) -> str:
    """Digits only, with the Brazilian country code prefixed when missing."""
    digits = re.sub(r"\D", "", phone or "")
    if digits.startswith("55"):
        return digits
    return f"55{digits}"


class WasenderGateway(IMessagingGateway):
    """Sends WhatsApp messages through WasenderAPI."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://www.wasenderapi.com/api",
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
            },
        )

    async def send_message(self, phone: str, text: str) -> MessageReceipt:
        to = to_gateway_number(phone)
        logger.info("Sending WhatsApp message to %s", to)

        try:
            async with self._client() as client:
                resp = await client.post("/send-message", json={"to": to, "text": text})
        except httpx.HTTPError as e:
            logger.error("WasenderAPI request failed: %s", e)
            raise MessageDeliveryError("Could not reach the WhatsApp gateway")

        if resp.status_code >= 400:
            logger.error(
                "WasenderAPI rejected message: %s %s", resp.status_code, resp.text[:200]
            )
            raise MessageDeliveryError(
                f"WhatsApp gateway error: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            body = resp.json()
        except ValueError:
            body = {}
        message_id = body.get("messageId") or body.get("id")
        if message_id is None and isinstance(body.get("data"), dict):
            message_id = body["data"].get("msgId") or body["data"].get("id")

        return MessageReceipt(to=to, message_id=str(message_id) if message_id else None)

    async def check_status(self) -> bool:
        try:
            async with self._client() as client:
                resp = await client.get("/status")
        except httpx.HTTPError as e:
            logger.warning("WasenderAPI status check failed: %s", e)
            return False
        return resp.status_code < 400


class DisabledGateway(IMessagingGateway):
    """Gateway used when messaging is not configured; every send fails."""

    async def send_message(self, phone: str, text: str) -> MessageReceipt:
        logger.debug("Messaging not configured; dropping message to %s: %s", phone, text)
        raise MessageDeliveryError("WhatsApp gateway not configured")

    async def check_status(self) -> bool:
        return False


def create_gateway(settings: Settings) -> IMessagingGateway:
    """Pick the gateway implementation for the current settings."""
    if not settings.messaging_configured:
        logger.warning("WASENDER_API_KEY not set; WhatsApp messages will not be sent")
        return DisabledGateway()
    return WasenderGateway(
        api_key=settings.wasender_api_key,
        base_url=settings.wasender_base_url,
        timeout=settings.messaging_timeout_seconds,
    )
