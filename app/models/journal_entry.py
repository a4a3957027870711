# models/journal_entry.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Integer, Float, DateTime, JSON, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.core.config import Base


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    themes = Column(JSON, nullable=False, default=list)  # ["gratitude", "overwhelm", ...]
    sentiment_score = Column(Float, nullable=True)       # -1 .. 1, from journal analysis
    mood_value = Column(Integer, nullable=True)
    mood_label = Column(String(50), nullable=True)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    user = relationship("Profile", back_populates="journal_entries")
