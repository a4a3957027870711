# schemas/mood.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime
from uuid import UUID

MOOD_LABELS = ["Very Sad", "Sad", "Neutral", "Happy", "Very Happy"]


class MoodEntryCreate(BaseModel):
    """A mood rating picked from the mood selector."""
    mood_value: int = Field(..., ge=1, le=5)
    mood_label: Optional[str] = Field(None, max_length=50)


class MoodRecord(BaseModel):
    """Mood entry as validated at the record store boundary."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    mood_value: int = Field(..., ge=1, le=5)
    mood_label: str
    created_at: datetime
