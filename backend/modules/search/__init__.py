"""
Search module.

Aggregates law and jurisprudence matches for a free-text query.

Public API:
- ISearchService: Interface for search
- SearchResult / SearchResponse: Result models
- extract_highlights: Snippet extraction used for result highlights
"""

from .interfaces import ISearchService
from .models import SearchRequest, SearchResponse, SearchResult
from .mapping import (
    CHUNK_SIMILARITY,
    CONTENT_PREVIEW_CHARS,
    LAW_SIMILARITY,
    MAX_HIGHLIGHTS,
    extract_highlights,
)

__all__ = [
    "ISearchService",
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
    "CHUNK_SIMILARITY",
    "CONTENT_PREVIEW_CHARS",
    "LAW_SIMILARITY",
    "MAX_HIGHLIGHTS",
    "extract_highlights",
]
