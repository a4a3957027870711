# crud/journal_entry.py
from typing import Any, Dict
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from app.crud.base import CRUDUserRecord
from app.models.journal_entry import JournalEntry


class CRUDJournalEntry(CRUDUserRecord[JournalEntry]):
    """CRUD operations for JournalEntry model."""

    def update(
        self, db: Session, *, db_obj: JournalEntry, obj_in: Dict[str, Any]
    ) -> JournalEntry:
        """
        Update a journal entry.

        Args:
            db: Database session
            db_obj: Existing JournalEntry instance
            obj_in: Column values to change

        Returns:
            Updated JournalEntry instance
        """
        for field, value in obj_in.items():
            setattr(db_obj, field, value)

        db_obj.updated_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj


crud_journal_entry = CRUDJournalEntry(JournalEntry)
