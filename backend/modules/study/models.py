"""
Study module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DifficultyLevel(str, Enum):
    VERY_EASY = "very-easy"
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    VERY_HARD = "very-hard"


class StudyAction(str, Enum):
    REVIEW = "review"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CardState(_CamelModel):
    """Scheduling state of one card. A missing state means a new card."""

    easiness_factor: float = Field(2.5, alias="easinessFactor", ge=1.3)
    repetition: int = Field(0, ge=0)
    interval: int = Field(1, ge=0)
    next_review_date: Optional[datetime] = Field(None, alias="nextReviewDate")
    total_reviews: int = Field(0, alias="totalReviews", ge=0)
    correct_reviews: int = Field(0, alias="correctReviews", ge=0)


class ScheduleResult(_CamelModel):
    easiness_factor: float = Field(..., alias="easinessFactor")
    repetition: int
    interval: int
    next_review_date: datetime = Field(..., alias="nextReviewDate")


class StudyRequest(_CamelModel):
    """Body of POST /api/study."""

    action: Optional[str] = None
    session_id: Optional[str] = Field(None, alias="sessionId")
    card_id: Optional[str] = Field(None, alias="cardId")
    quality: Optional[float] = None
    response_time: Optional[int] = Field(None, alias="responseTime", ge=0)
    card: Optional[CardState] = None


class SessionProgress(_CamelModel):
    id: Optional[str] = None
    cards_studied: int = Field(1, alias="cardsStudied")
    cards_correct: int = Field(0, alias="cardsCorrect")
    average_response_time: int = Field(0, alias="averageResponseTime")


class ReviewResult(_CamelModel):
    """Outcome of grading one card; serialize with ``by_alias=True``."""

    card_id: str = Field(..., alias="cardId")
    quality: int
    sm2_result: ScheduleResult = Field(..., alias="sm2Result")
    difficulty: DifficultyLevel
    session: SessionProgress
    feedback: str
