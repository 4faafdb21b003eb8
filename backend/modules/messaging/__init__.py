"""
Messaging module.

Delivers WhatsApp text messages (verification codes, welcome messages).

Public API:
- IMessagingGateway: Interface for sending messages
- WasenderGateway / DisabledGateway: implementations
- MessageDeliveryError: raised when a message cannot be delivered
"""

from .interfaces import IMessagingGateway
from .gateway import WasenderGateway, DisabledGateway, create_gateway, to_gateway_number
from .models import MessageReceipt
from .exceptions import MessageDeliveryError

__all__ = [
    "IMessagingGateway",
    "WasenderGateway",
    "DisabledGateway",
    "create_gateway",
    "to_gateway_number",
    "MessageReceipt",
    "MessageDeliveryError",
]
