# services/mood.py
import logging
from typing import List, Optional
from uuid import UUID
from datetime import datetime, time, timezone
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.crud.mood_entry import crud_mood_entry
from app.models.profile import Profile
from app.schemas.mood import MOOD_LABELS, MoodEntryCreate, MoodRecord
from app.services.record_store import RecordKind, record_store

logger = logging.getLogger(__name__)


class MoodService:
    """Mood check-ins from the dashboard mood selector."""

    def record_mood(self, db: Session, *, user: Profile, mood_in: MoodEntryCreate) -> MoodRecord:
        """Store a mood rating; the label follows the scale when none is given."""
        label = (mood_in.mood_label or "").strip() or MOOD_LABELS[mood_in.mood_value - 1]

        row = record_store.write(
            db,
            "save mood",
            lambda: crud_mood_entry.create(
                db,
                user_id=user.id,
                obj_in={"mood_value": mood_in.mood_value, "mood_label": label},
            ),
        ).unwrap()
        logger.info(f"Mood {mood_in.mood_value} recorded for {user.id}")
        return MoodRecord.model_validate(row)

    def list_moods(
        self,
        db: Session,
        *,
        user: Profile,
        since: Optional[datetime] = None,
        limit: Optional[int] = None,
        descending: bool = True,
    ) -> List[MoodRecord]:
        return record_store.fetch(
            db, RecordKind.mood, user.id, since=since, limit=limit, descending=descending
        ).unwrap()

    def get_today_mood(
        self, db: Session, *, user: Profile, now: Optional[datetime] = None
    ) -> Optional[MoodRecord]:
        """Latest mood recorded since midnight (UTC)."""
        now = now or datetime.now(timezone.utc)
        start_of_day = datetime.combine(now.date(), time.min, tzinfo=timezone.utc)
        moods = record_store.fetch(
            db, RecordKind.mood, user.id, since=start_of_day, limit=1
        ).unwrap()
        return moods[0] if moods else None

    def delete_mood(self, db: Session, *, user: Profile, mood_id: UUID) -> None:
        mood = crud_mood_entry.get_for_user(db, id=mood_id, user_id=user.id)
        if not mood:
            raise NotFoundError("Mood entry not found")
        record_store.write(db, "delete mood", lambda: crud_mood_entry.delete(db, db_obj=mood)).unwrap()


mood_service = MoodService()
