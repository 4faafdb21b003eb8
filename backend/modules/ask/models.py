"""
Ask module data models.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class AskRequest(BaseModel):
    question: Optional[str] = None
    context: Optional[str] = None


class AskMetadata(BaseModel):
    model: str
    context_length: int = 0
    sources_count: int = 0
    search_type: str = "general"


class AskResponse(BaseModel):
    """An answer. There is no guarantee of structured citations."""

    answer: str
    sources: list[dict[str, Any]] = Field(default_factory=list)
    confidence: int = Field(0, description="0 when no model produced the answer")
    query: Optional[str] = None
    citations: str = ""
    timestamp: Optional[datetime] = None
    metadata: Optional[AskMetadata] = None
