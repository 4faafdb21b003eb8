"""
Ask module interface.
"""

from typing import Optional, Protocol, runtime_checkable

from .models import AskResponse


@runtime_checkable
class IAskService(Protocol):
    """Interface for the legal question assistant."""

    async def answer(self, question: str, context: Optional[str] = None) -> AskResponse:
        """
        Answer a question, optionally grounded in provided context.

        Raises:
            AnswerGenerationError: If the language model call fails
        """
        ...
