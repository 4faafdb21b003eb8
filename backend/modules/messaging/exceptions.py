"""
Messaging module exceptions.
"""

from typing import Optional

from shared.exceptions import ExternalServiceError


class MessageDeliveryError(ExternalServiceError):
    """Raised when the WhatsApp gateway does not accept a message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            service="wasender",
            code="MESSAGE_DELIVERY_FAILED",
            details={"status_code": status_code} if status_code else {},
        )
