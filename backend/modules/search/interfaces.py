"""
Search module interface.
"""

from typing import Protocol, runtime_checkable

from .models import SearchResponse


@runtime_checkable
class ISearchService(Protocol):
    """Interface for the law search aggregator."""

    async def search(self, query: str, search_type: str, limit: int) -> SearchResponse:
        """
        Search laws and jurisprudence chunks.

        Law rows always come before chunk rows. Never raises for query-layer
        errors; those yield an empty result with a message.
        """
        ...
