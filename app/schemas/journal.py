# schemas/journal.py
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, List
from datetime import date, datetime
from uuid import UUID

from .completion import JournalAnalysis


class JournalEntryBase(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    content: str = Field(..., min_length=1, description="Journal entry content")
    mood_value: Optional[int] = Field(None, ge=1, le=5)

    @field_validator('content')
    @classmethod
    def validate_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Please write something before saving')
        return v


class JournalEntryCreate(JournalEntryBase):
    """New journal entry; ``entry_date`` backdates it."""
    entry_date: Optional[date] = None


class JournalEntryUpdate(JournalEntryBase):
    """Edit of an existing entry. Content is re-analyzed."""
    entry_date: Optional[date] = None


class JournalRecord(BaseModel):
    """Journal entry as validated at the record store boundary."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: Optional[str] = None
    content: str
    themes: List[str] = Field(default_factory=list)
    sentiment_score: Optional[float] = Field(None, ge=-1, le=1)
    mood_value: Optional[int] = Field(None, ge=1, le=5)
    mood_label: Optional[str] = None
    created_at: datetime

    @field_validator('themes', mode='before')
    @classmethod
    def none_themes_to_empty(cls, v):
        return v or []


class JournalSaved(BaseModel):
    """A saved entry plus the analysis that produced its themes, when one succeeded."""
    entry: JournalRecord
    analysis: Optional[JournalAnalysis] = None
