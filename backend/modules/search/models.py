"""
Search module data models.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, Field


DEFAULT_SEARCH_TYPE = "smart"
DEFAULT_LIMIT = 15


class SearchResult(BaseModel):
    """One hit, from either the laws table or the law_chunks table."""

    id: Union[int, str]
    title: str
    content: str = Field(..., description="Content truncated to 300 chars")
    type: str = Field(..., description="article or jurisprudence")
    source: str
    similarity: float = Field(..., description="Fixed per source table, not a computed score")
    highlights: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)


class SearchDebug(BaseModel):
    laws_found: int = 0
    chunks_found: int = 0
    used_fallback: bool = False
    chunks_error: Optional[str] = None


class SearchResponse(BaseModel):
    results: list[SearchResult] = Field(default_factory=list)
    total: int = 0
    query: str
    type: str = DEFAULT_SEARCH_TYPE
    message: Optional[str] = None
    debug: Optional[SearchDebug] = None


class SearchRequest(BaseModel):
    """POST /api/search body."""

    query: Optional[str] = None
    type: str = DEFAULT_SEARCH_TYPE
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=100)
