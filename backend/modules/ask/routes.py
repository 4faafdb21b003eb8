"""
Ask API endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from api.dependencies import get_ask_service

from .exceptions import AnswerGenerationError
from .interfaces import IAskService
from .models import AskRequest
from .prompts import ERROR_ANSWER

router = APIRouter()


async def _answer(service: IAskService, question: str, context: Optional[str]):
    try:
        result = await service.answer(question, context)
    except AnswerGenerationError as e:
        return JSONResponse(
            status_code=500,
            content={
                "error": e.message,
                "answer": ERROR_ANSWER,
                "sources": [],
                "confidence": 0,
            },
        )
    return result.model_dump(mode="json", exclude_none=True)


@router.post("")
async def ask(request: AskRequest, service: IAskService = Depends(get_ask_service)):
    if not request.question or not request.question.strip():
        raise HTTPException(status_code=400, detail="Question is required")
    return await _answer(service, request.question.strip(), request.context)


@router.get("")
async def ask_get(
    q: Optional[str] = Query(default=None),
    service: IAskService = Depends(get_ask_service),
):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail="Question parameter (q) is required")
    return await _answer(service, q.strip(), None)
