# models/mood_entry.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship
from app.core.config import Base


class MoodEntry(Base):
    __tablename__ = "mood_entries"
    __table_args__ = (
        CheckConstraint("mood_value BETWEEN 1 AND 5", name="ck_mood_entries_mood_value"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    mood_value = Column(Integer, nullable=False)  # 1 (Very Sad) .. 5 (Very Happy)
    mood_label = Column(String(50), nullable=False)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    user = relationship("Profile", back_populates="mood_entries")
