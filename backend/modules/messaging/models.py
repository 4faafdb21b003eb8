"""
Messaging module data models.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageReceipt(BaseModel):
    """Acknowledgement returned by the gateway for a sent message."""

    to: str = Field(..., description="Destination in gateway format (digits only)")
    message_id: Optional[str] = Field(None, description="Gateway message ID")
