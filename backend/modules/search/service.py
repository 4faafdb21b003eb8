"""
Search service implementation.

Combines law-table and chunk-table matches into one list. Searching never
fails the request: query-layer errors come back as an empty result set
with an explanatory message.
"""

import logging
from typing import Optional

from .interfaces import ISearchService
from .mapping import chunk_to_result, law_to_result
from .models import DEFAULT_LIMIT, DEFAULT_SEARCH_TYPE, SearchDebug, SearchResponse
from .repository import LawSearchRepository

logger = logging.getLogger(__name__)

DATABASE_NOT_CONFIGURED = "Database not configured"
SEARCH_FAILED = "Não foi possível realizar a busca no momento"


class SearchService(ISearchService):
    """
    Implementation of the search service.

    Args:
        repository: Law search repository, or None when no database is
            configured (every search then returns an empty result set)
    """

    def __init__(self, repository: Optional[LawSearchRepository]):
        self._repository = repository

    async def search(
        self,
        query: str,
        search_type: str = DEFAULT_SEARCH_TYPE,
        limit: int = DEFAULT_LIMIT,
    ) -> SearchResponse:
        if self._repository is None:
            return SearchResponse(query=query, type=search_type, message=DATABASE_NOT_CONFIGURED)

        per_table = max(limit // 2, 1)
        try:
            laws = self._repository.search_laws(query, per_table)
            chunks, debug = self._search_chunks(query, per_table)
        except Exception:
            logger.exception("Search failed for query %r", query)
            return SearchResponse(query=query, type=search_type, message=SEARCH_FAILED)

        results = [law_to_result(row, query) for row in laws]
        results.extend(chunk_to_result(row, query) for row in chunks)
        debug.laws_found = len(laws)

        logger.info("Search %r returned %d results", query, len(results))
        return SearchResponse(
            results=results,
            total=len(results),
            query=query,
            type=search_type,
            debug=debug,
        )

    def _search_chunks(self, query: str, limit: int) -> tuple[list[dict], SearchDebug]:
        """Text search first; substring match when it finds nothing or errors."""
        debug = SearchDebug()
        try:
            chunks = self._repository.search_chunks_fulltext(query, limit)
        except Exception as e:
            logger.warning("Chunk text search failed for %r, using substring match: %s", query, e)
            debug.chunks_error = str(e)
            chunks = []

        if not chunks:
            debug.used_fallback = True
            chunks = self._repository.search_chunks_substring(query, limit)

        debug.chunks_found = len(chunks)
        return chunks, debug
