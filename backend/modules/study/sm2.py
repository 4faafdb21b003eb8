"""
SM-2 spaced repetition scheduling.

Pure functions over a card's scheduling state. Quality is graded 0-5
(0 = complete blackout, 5 = perfect recall); grades of 3 and above count
as a correct answer.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from .models import CardState, DifficultyLevel, ScheduleResult

DEFAULT_EASINESS = 2.5
MIN_EASINESS = 1.3
PASSING_QUALITY = 3
FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def clamp_quality(quality: float) -> int:
    """Round to the nearest grade and clamp into 0-5."""
    return max(0, min(5, int(_round_half_up(quality))))


def calculate_next(
    state: Optional[CardState],
    quality: float,
    now: Optional[datetime] = None,
) -> ScheduleResult:
    """
    Schedule the next review after answering a card.

    A correct answer advances the interval 1 -> 6 -> interval * EF days;
    an incorrect one resets the repetition count and reviews again in a
    day. The easiness factor moves with the grade and never drops below
    1.3.
    """
    state = state or CardState()
    now = now or datetime.now(timezone.utc)
    quality = clamp_quality(quality)

    easiness = state.easiness_factor
    repetition = state.repetition
    interval = state.interval

    if quality >= PASSING_QUALITY:
        if repetition == 0:
            interval = FIRST_INTERVAL_DAYS
        elif repetition == 1:
            interval = SECOND_INTERVAL_DAYS
        else:
            interval = int(_round_half_up(interval * easiness))
        repetition += 1
    else:
        repetition = 0
        interval = FIRST_INTERVAL_DAYS

    miss = 5 - quality
    easiness = max(MIN_EASINESS, easiness + (0.1 - miss * (0.08 + miss * 0.02)))

    return ScheduleResult(
        easiness_factor=_round_half_up(easiness, 2),
        repetition=repetition,
        interval=interval,
        next_review_date=now + timedelta(days=interval),
    )


def is_due(state: CardState, now: Optional[datetime] = None) -> bool:
    if state.next_review_date is None:
        return True
    return (now or datetime.now(timezone.utc)) >= state.next_review_date


def due_cards(cards: Sequence[CardState], now: Optional[datetime] = None) -> list[CardState]:
    """Cards due at ``now``, earliest scheduled first."""
    now = now or datetime.now(timezone.utc)
    due = [card for card in cards if is_due(card, now)]
    return sorted(due, key=lambda card: card.next_review_date or now)


def retention_rate(state: CardState) -> float:
    """Percentage of reviews answered correctly."""
    if state.total_reviews == 0:
        return 0.0
    return state.correct_reviews / state.total_reviews * 100


def difficulty_level(easiness_factor: float) -> DifficultyLevel:
    if easiness_factor >= 2.8:
        return DifficultyLevel.VERY_EASY
    if easiness_factor >= 2.5:
        return DifficultyLevel.EASY
    if easiness_factor >= 2.2:
        return DifficultyLevel.NORMAL
    if easiness_factor >= 1.8:
        return DifficultyLevel.HARD
    return DifficultyLevel.VERY_HARD
