"""
Ask module exceptions.
"""

from shared.exceptions import ExternalServiceError


class AnswerGenerationError(ExternalServiceError):
    """Raised when the language model call fails."""

    def __init__(self, reason: str):
        super().__init__(
            "Failed to generate answer",
            service="openai",
            code="ANSWER_GENERATION_FAILED",
            details={"reason": reason},
        )
