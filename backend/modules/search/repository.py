"""
Search repository for database access.

Read-only queries over the two searchable tables:
- laws
- law_chunks
"""

import re
from typing import Any

from shared.repository import BaseRepository

LAW_COLUMNS = "id, title, article, content"
CHUNK_COLUMNS = "id, content, law_id, metadata"
TEXT_SEARCH_CONFIG = "portuguese"


def sanitize_text_query(query: str) -> str:
    """Replace punctuation with spaces so the text-search parser accepts it."""
    return re.sub(r"[^\w\s]", " ", query)


class LawSearchRepository(BaseRepository[dict[str, Any]]):
    """Returns raw rows; mapping to SearchResult happens in the service."""

    def search_laws(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Substring match across content, article label and title (logical OR)."""
        pattern = self._quote(f"%{query}%")
        result = (
            self._db.table("laws")
            .select(LAW_COLUMNS)
            .or_(f"content.ilike.{pattern},article.ilike.{pattern},title.ilike.{pattern}")
            .limit(limit)
            .execute()
        )
        return result.data or []

    def search_chunks_fulltext(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Language-aware text search on chunk content."""
        result = (
            self._db.table("law_chunks")
            .select(CHUNK_COLUMNS)
            .text_search(
                "content",
                sanitize_text_query(query),
                options={"config": TEXT_SEARCH_CONFIG, "type": "plain"},
            )
            .limit(limit)
            .execute()
        )
        return result.data or []

    def search_chunks_substring(self, query: str, limit: int) -> list[dict[str, Any]]:
        """Plain substring match on chunk content, for citation-style queries."""
        result = (
            self._db.table("law_chunks")
            .select(CHUNK_COLUMNS)
            .ilike("content", f"%{query}%")
            .limit(limit)
            .execute()
        )
        return result.data or []
