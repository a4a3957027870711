# schemas/insight.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, Dict, Any, List
from datetime import datetime
from uuid import UUID
import enum


class InsightType(str, enum.Enum):
    pattern = "pattern"
    mood = "mood"
    growth = "growth"
    advice = "advice"


class InsightDraft(BaseModel):
    """An insight produced by the completion service or the local fallback, before it is stored."""
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)
    type: InsightType = InsightType.pattern
    data: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('type', mode='before')
    @classmethod
    def unknown_type_to_pattern(cls, v):
        # Replies carry null or invented types; those insights are still kept
        value = v.strip().lower() if isinstance(v, str) else None
        if value in {t.value for t in InsightType}:
            return value
        return InsightType.pattern

    @field_validator('data', mode='before')
    @classmethod
    def none_data_to_empty(cls, v):
        return v or {}


class InsightRecord(BaseModel):
    """Insight as validated at the record store boundary."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    content: str
    insight_type: InsightType
    data: Optional[Dict[str, Any]] = None
    is_read: bool = False
    created_at: datetime


class GeneratedInsights(BaseModel):
    generated: int
    from_fallback: bool
    insights: List[InsightRecord]


class UnreadCount(BaseModel):
    unread: int
