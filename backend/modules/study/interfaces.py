"""
Study module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import CardState, ReviewResult


@runtime_checkable
class IStudyService(Protocol):
    """Interface for spaced repetition reviews."""

    def review(
        self,
        card_id: str,
        quality: float,
        state: Optional[CardState] = None,
        session_id: Optional[str] = None,
        response_time_ms: Optional[int] = None,
    ) -> ReviewResult:
        """
        Grade a card and schedule its next review.

        Raises:
            IncompleteReviewError: If the card id is empty
        """
        ...
