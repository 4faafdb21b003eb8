"""
Ask service implementation.

Answers free-form legal questions with an OpenAI chat model through
langchain-openai.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from shared.config import Settings

from .exceptions import AnswerGenerationError
from .interfaces import IAskService
from .models import AskMetadata, AskResponse
from .prompts import (
    DEFAULT_CONTEXT,
    EMPTY_ANSWER,
    NOT_CONFIGURED_ANSWER,
    SYSTEM_PROMPT,
    USER_PROMPT,
)

logger = logging.getLogger(__name__)

TEMPERATURE = 0.3
MAX_TOKENS = 1000
ANSWER_CONFIDENCE = 80


def create_chat_model(settings: Settings) -> Optional[ChatOpenAI]:
    """Return a ChatOpenAI client, or None when no API key is configured."""
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY not set; /api/ask will return a neutral answer")
        return None
    return ChatOpenAI(
        model=settings.openai_model,
        api_key=settings.openai_api_key,
        temperature=TEMPERATURE,
        max_tokens=MAX_TOKENS,
    )


class AskService(IAskService):
    """
    Implementation of the ask service.

    Args:
        model_name: Model name reported in response metadata
        llm: Chat model, or None when the assistant is not configured
    """

    def __init__(self, model_name: str, llm: Optional[BaseChatModel]):
        self._model_name = model_name
        self._llm = llm

    async def answer(self, question: str, context: Optional[str] = None) -> AskResponse:
        if self._llm is None:
            return AskResponse(answer=NOT_CONFIGURED_ANSWER, confidence=0)

        messages = [
            SystemMessage(content=SYSTEM_PROMPT.format(context=context or DEFAULT_CONTEXT)),
            HumanMessage(content=USER_PROMPT.format(question=question)),
        ]
        try:
            response = await self._llm.ainvoke(messages)
        except Exception as e:
            logger.exception("Chat model call failed")
            raise AnswerGenerationError(str(e))

        content = response.content if isinstance(response.content, str) else ""
        return AskResponse(
            answer=content or EMPTY_ANSWER,
            confidence=ANSWER_CONFIDENCE,
            query=question,
            timestamp=datetime.now(timezone.utc),
            metadata=AskMetadata(
                model=self._model_name,
                context_length=len(context or ""),
                search_type="provided" if context else "general",
            ),
        )
