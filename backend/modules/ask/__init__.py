"""
Ask module.

Legal question answering backed by an OpenAI chat model.

Public API:
- IAskService: Interface for the assistant
- AskResponse: Answer model
"""

from .interfaces import IAskService
from .models import AskRequest, AskResponse
from .exceptions import AnswerGenerationError

__all__ = ["IAskService", "AskRequest", "AskResponse", "AnswerGenerationError"]
