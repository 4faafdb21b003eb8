"""
Study module exceptions.
"""

from shared.exceptions import ValidationError


class InvalidStudyActionError(ValidationError):
    """Raised for an action the study endpoint does not handle."""

    def __init__(self, action: object):
        super().__init__("Invalid action", code="INVALID_STUDY_ACTION", details={"action": action})


class IncompleteReviewError(ValidationError):
    """Raised when a review arrives without a card id or a grade."""

    def __init__(self):
        super().__init__(
            "Card ID and quality are required for review",
            code="INCOMPLETE_REVIEW",
        )
