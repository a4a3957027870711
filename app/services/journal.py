# services/journal.py
import logging
from typing import List, Optional
from uuid import UUID
from datetime import date, datetime, timezone
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.crud.journal_entry import crud_journal_entry
from app.models.profile import Profile
from app.schemas.completion import JournalAnalysis
from app.schemas.journal import (
    JournalEntryBase,
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalRecord,
    JournalSaved,
)
from app.schemas.mood import MOOD_LABELS
from app.services.completion import companion_service
from app.services.record_store import RecordKind, record_store

logger = logging.getLogger(__name__)


def default_title(day: date) -> str:
    return f"Entry from {day.month}/{day.day}/{day.year}"


class JournalService:
    """
    Journal entries.

    Saving an entry runs it through journal analysis first. Analysis is best
    effort: when the completion service is down the entry is still saved,
    just without themes or a sentiment score.
    """

    # ====================================================
    # HELPERS
    # ====================================================

    def _analyze(self, content: str) -> Optional[JournalAnalysis]:
        result = companion_service.analyze_journal(content)
        if not result.ok:
            logger.warning(f"Journal analysis skipped: {result.message}")
            return None
        return result.value

    def _entry_timestamp(self, entry_date: Optional[date], now: datetime) -> datetime:
        if entry_date is None or entry_date == now.date():
            return now
        return datetime.combine(entry_date, now.timetz())

    def _entry_values(
        self, data: JournalEntryBase, analysis: Optional[JournalAnalysis], created_at: datetime
    ) -> dict:
        return {
            "title": (data.title or "").strip() or default_title(created_at.date()),
            "content": data.content,
            "themes": analysis.themes if analysis else [],
            "sentiment_score": analysis.sentiment_score if analysis else None,
            "mood_value": data.mood_value,
            "mood_label": MOOD_LABELS[data.mood_value - 1] if data.mood_value else None,
            "created_at": created_at,
        }

    def _get_owned(self, db: Session, user: Profile, entry_id: UUID):
        entry = crud_journal_entry.get_for_user(db, id=entry_id, user_id=user.id)
        if not entry:
            raise NotFoundError("Journal entry not found")
        return entry

    # ====================================================
    # OPERATIONS
    # ====================================================

    def create_entry(
        self,
        db: Session,
        *,
        user: Profile,
        data: JournalEntryCreate,
        now: Optional[datetime] = None,
    ) -> JournalSaved:
        now = now or datetime.now(timezone.utc)
        analysis = self._analyze(data.content)
        values = self._entry_values(data, analysis, self._entry_timestamp(data.entry_date, now))

        row = record_store.write(
            db,
            "save journal entry",
            lambda: crud_journal_entry.create(db, user_id=user.id, obj_in=values),
        ).unwrap()
        logger.info(f"Journal entry {row.id} saved for {user.id} (themes={values['themes']})")
        return JournalSaved(entry=JournalRecord.model_validate(row), analysis=analysis)

    def update_entry(
        self,
        db: Session,
        *,
        user: Profile,
        entry_id: UUID,
        data: JournalEntryUpdate,
        now: Optional[datetime] = None,
    ) -> JournalSaved:
        entry = self._get_owned(db, user, entry_id)
        now = now or datetime.now(timezone.utc)

        analysis = self._analyze(data.content)
        created_at = (
            self._entry_timestamp(data.entry_date, now) if data.entry_date else entry.created_at
        )
        values = self._entry_values(data, analysis, created_at)

        row = record_store.write(
            db,
            "update journal entry",
            lambda: crud_journal_entry.update(db, db_obj=entry, obj_in=values),
        ).unwrap()
        return JournalSaved(entry=JournalRecord.model_validate(row), analysis=analysis)

    def list_entries(
        self, db: Session, *, user: Profile, limit: Optional[int] = None
    ) -> List[JournalRecord]:
        return record_store.fetch(db, RecordKind.journal, user.id, limit=limit).unwrap()

    def get_entry(self, db: Session, *, user: Profile, entry_id: UUID) -> JournalRecord:
        return JournalRecord.model_validate(self._get_owned(db, user, entry_id))

    def delete_entry(self, db: Session, *, user: Profile, entry_id: UUID) -> None:
        entry = self._get_owned(db, user, entry_id)
        record_store.write(
            db, "delete journal entry", lambda: crud_journal_entry.delete(db, db_obj=entry)
        ).unwrap()


journal_service = JournalService()
