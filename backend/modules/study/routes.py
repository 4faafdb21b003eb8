"""
Study API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_study_service
from api.middleware.auth import require_user
from shared.exceptions import ValidationError
from shared.models import AuthenticatedUser

from .exceptions import IncompleteReviewError, InvalidStudyActionError
from .interfaces import IStudyService
from .models import StudyAction, StudyRequest

router = APIRouter()


@router.post("")
async def study(
    request: StudyRequest,
    user: AuthenticatedUser = Depends(require_user),
    service: IStudyService = Depends(get_study_service),
) -> dict:
    """Grade a reviewed card (``action=review``) and return its next schedule."""
    try:
        if request.action != StudyAction.REVIEW.value:
            raise InvalidStudyActionError(request.action)
        if not request.card_id or request.quality is None:
            raise IncompleteReviewError()
        result = service.review(
            request.card_id,
            request.quality,
            state=request.card,
            session_id=request.session_id,
            response_time_ms=request.response_time,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return result.model_dump(mode="json", by_alias=True)
