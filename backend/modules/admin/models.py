"""
Admin module data models.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class PlanRecord(BaseModel):
    """A row of the subscription_plans table."""

    id: str
    name: str
    description: Optional[str] = None
    price: float
    duration: str
    features: list[str] = Field(default_factory=list)
    is_active: bool = True
    created_at: Optional[datetime] = None


class CreatePlanRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[str] = None
    features: list[str] = Field(default_factory=list)


class UpdatePlanRequest(BaseModel):
    """Partial update; only fields that are set are written."""

    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    duration: Optional[str] = None
    features: Optional[list[str]] = None
    is_active: Optional[bool] = None


class SettingsUpdateRequest(BaseModel):
    settings: Optional[dict[str, Any]] = None


class StatsAction(str, Enum):
    REFRESH_STATS = "refresh_stats"
    CLEAR_CACHE = "clear_cache"
    BACKUP_DATA = "backup_data"


class StatsActionRequest(BaseModel):
    action: Optional[str] = None
    data: Optional[dict[str, Any]] = None


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UserStatsSummary(_CamelModel):
    total: int = 0
    active: int = 0
    new_this_month: int = Field(0, alias="newThisMonth")
    premium: int = 0


class ContentStats(_CamelModel):
    laws: int = 0
    articles: int = 0
    questions: int = 0
    flashcards: int = 0


class ActivityStats(_CamelModel):
    quizzes: int = 0
    study_sessions: int = Field(0, alias="studySessions")
    searches: int = 0
    avg_session_time: int = Field(0, alias="avgSessionTime")


class SystemStats(_CamelModel):
    storage: int = 0
    api_calls: int = Field(0, alias="apiCalls")
    uptime: int = 100
    errors: int = 0


class PlatformStats(_CamelModel):
    """Dashboard counters; serialize with ``by_alias=True``."""

    users: UserStatsSummary = Field(default_factory=UserStatsSummary)
    content: ContentStats = Field(default_factory=ContentStats)
    activity: ActivityStats = Field(default_factory=ActivityStats)
    system: SystemStats = Field(default_factory=SystemStats)
