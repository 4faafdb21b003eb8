"""
Study module.

SM-2 spaced repetition scheduling for flashcard reviews.

Public API:
- IStudyService: Interface for grading reviews
- calculate_next, is_due, due_cards: Scheduling functions
- CardState / ScheduleResult / ReviewResult: Models
"""

from .interfaces import IStudyService
from .models import CardState, DifficultyLevel, ReviewResult, ScheduleResult, StudyRequest
from .sm2 import calculate_next, clamp_quality, difficulty_level, due_cards, is_due, retention_rate
from .exceptions import IncompleteReviewError, InvalidStudyActionError

__all__ = [
    # Interface
    "IStudyService",
    # Models
    "CardState",
    "DifficultyLevel",
    "ReviewResult",
    "ScheduleResult",
    "StudyRequest",
    # Scheduling
    "calculate_next",
    "clamp_quality",
    "difficulty_level",
    "due_cards",
    "is_due",
    "retention_rate",
    # Exceptions
    "IncompleteReviewError",
    "InvalidStudyActionError",
]
