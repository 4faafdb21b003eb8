"""
Study service implementation.

Grades flashcard reviews with SM-2. Card content and decks live in the
client; the caller sends the card's current scheduling state along with
the grade and gets the next state back.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from .exceptions import IncompleteReviewError
from .interfaces import IStudyService
from .models import CardState, ReviewResult, SessionProgress
from .sm2 import PASSING_QUALITY, calculate_next, clamp_quality, difficulty_level

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_TIME_MS = 3000


def review_feedback(quality: int, interval: int) -> str:
    if quality >= 4:
        return f"Excelente! Próxima revisão em {interval} dias."
    if quality == PASSING_QUALITY:
        return f"Bom trabalho! Continue praticando. Próxima revisão em {interval} dias."
    if quality == 2:
        return f"Quase lá! Revise o material novamente. Próxima revisão em {interval} dias."
    return "Não desista! Este cartão será revisado novamente em breve para reforçar o aprendizado."


class StudyService(IStudyService):
    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def review(
        self,
        card_id: str,
        quality: float,
        state: Optional[CardState] = None,
        session_id: Optional[str] = None,
        response_time_ms: Optional[int] = None,
    ) -> ReviewResult:
        if not card_id:
            raise IncompleteReviewError()

        grade = clamp_quality(quality)
        schedule = calculate_next(state, grade, self._clock())
        logger.debug(
            "Card %s graded %s; next review in %s days", card_id, grade, schedule.interval
        )

        return ReviewResult(
            card_id=card_id,
            quality=grade,
            sm2_result=schedule,
            difficulty=difficulty_level(schedule.easiness_factor),
            session=SessionProgress(
                id=session_id,
                cards_studied=1,
                cards_correct=1 if grade >= PASSING_QUALITY else 0,
                average_response_time=response_time_ms or DEFAULT_RESPONSE_TIME_MS,
            ),
            feedback=review_feedback(grade, schedule.interval),
        )
