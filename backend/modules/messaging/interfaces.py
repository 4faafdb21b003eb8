"""
Messaging module interface.

The auth module depends on IMessagingGateway, never on the HTTP client,
so tests can swap in a mock gateway.
"""

from typing import Protocol, runtime_checkable

from .models import MessageReceipt


@runtime_checkable
class IMessagingGateway(Protocol):
    """Interface for sending WhatsApp text messages."""

    async def send_message(self, phone: str, text: str) -> MessageReceipt:
        """
        Send a text message.

        Args:
            phone: Destination phone, any formatting
            text: Message body

        Returns:
            MessageReceipt from the gateway

        Raises:
            MessageDeliveryError: If the gateway rejects or cannot be reached
        """
        ...

    async def check_status(self) -> bool:
        """Return True if the gateway reports itself as reachable."""
        ...
