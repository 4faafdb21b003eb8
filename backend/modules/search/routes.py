"""
Search API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_search_service

from .interfaces import ISearchService
from .models import DEFAULT_LIMIT, DEFAULT_SEARCH_TYPE, SearchRequest, SearchResponse

router = APIRouter()


@router.get("", response_model=SearchResponse, response_model_exclude_none=True)
async def search_get(
    q: Optional[str] = Query(default=None, description="Search text"),
    type: str = Query(default=DEFAULT_SEARCH_TYPE),
    limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=100),
    service: ISearchService = Depends(get_search_service),
) -> SearchResponse:
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Query parameter is required")
    return await service.search(q.strip(), type, limit)


@router.post("", response_model=SearchResponse, response_model_exclude_none=True)
async def search_post(
    request: SearchRequest,
    service: ISearchService = Depends(get_search_service),
) -> SearchResponse:
    if not request.query or not request.query.strip():
        raise HTTPException(status_code=400, detail="Query is required")
    return await service.search(request.query.strip(), request.type, request.limit)
