# crud/insight.py
from uuid import UUID
from sqlalchemy.orm import Session

from app.crud.base import CRUDUserRecord
from app.models.insight import Insight


class CRUDInsight(CRUDUserRecord[Insight]):
    """CRUD operations for Insight model."""

    def mark_read(self, db: Session, *, db_obj: Insight) -> Insight:
        """
        Flip an insight to read. Insights are otherwise immutable.

        Args:
            db: Database session
            db_obj: Existing Insight instance

        Returns:
            Updated Insight instance
        """
        db_obj.is_read = True
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def count_unread(self, db: Session, *, user_id: UUID) -> int:
        """Count insights the user has not opened yet."""
        return (
            db.query(Insight)
            .filter(Insight.user_id == user_id, Insight.is_read.is_(False))
            .count()
        )


crud_insight = CRUDInsight(Insight)
