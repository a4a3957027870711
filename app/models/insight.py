# models/insight.py

import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Boolean, DateTime, JSON, ForeignKey, Enum as SqlEnum, Uuid
from sqlalchemy.orm import relationship
from app.core.config import Base


class InsightType(str, enum.Enum):
    pattern = "pattern"
    mood = "mood"
    growth = "growth"
    advice = "advice"


class Insight(Base):
    __tablename__ = "insights"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4, unique=True, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    insight_type = Column(SqlEnum(InsightType), nullable=False, default=InsightType.pattern)
    data = Column(JSON, nullable=False, default=dict)  # {"averageMood": 3.4, "entryCount": 10, ...}

    # Only ever flipped to True by "mark read"
    is_read = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), index=True)

    user = relationship("Profile", back_populates="insights")
