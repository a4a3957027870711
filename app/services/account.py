# services/account.py
import logging
from typing import Any, Dict
from datetime import datetime, timezone
from sqlalchemy.orm import Session

from app.crud.chat_message import crud_chat_message
from app.crud.insight import crud_insight
from app.crud.journal_entry import crud_journal_entry
from app.crud.mood_entry import crud_mood_entry
from app.models.profile import Profile
from app.schemas.profile import ProfileOut
from app.services.record_store import RecordKind, record_store

logger = logging.getLogger(__name__)

_EXPORT_KEYS = {
    RecordKind.journal: "journal_entries",
    RecordKind.mood: "mood_entries",
    RecordKind.chat: "chat_messages",
    RecordKind.insight: "insights",
}

_DELETE_ORDER = [
    ("journal_entries", crud_journal_entry),
    ("mood_entries", crud_mood_entry),
    ("chat_messages", crud_chat_message),
    ("insights", crud_insight),
]


def export_filename(now: datetime) -> str:
    return f"mindmate-data-{now.date().isoformat()}.json"


class AccountService:
    """Settings page: data export and erasure."""

    def export_data(self, db: Session, *, user: Profile, now: datetime = None) -> Dict[str, Any]:
        """Everything stored for the user, JSON ready."""
        now = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "profile": ProfileOut.model_validate(user).model_dump(mode="json"),
        }
        for kind, key in _EXPORT_KEYS.items():
            records = record_store.fetch(db, kind, user.id, descending=False).unwrap()
            payload[key] = [r.model_dump(mode="json") for r in records]
        payload["exported_at"] = now.isoformat()

        logger.info(f"Exported data for {user.id}")
        return payload

    def delete_all_data(self, db: Session, *, user: Profile) -> Dict[str, int]:
        """Delete every journal entry, mood, chat message and insight. The profile stays."""
        deleted = {}
        for key, crud in _DELETE_ORDER:
            deleted[key] = record_store.write(
                db, f"delete {key}", lambda crud=crud: crud.delete_by_user_id(db, user_id=user.id)
            ).unwrap()

        logger.info(f"Deleted all data for {user.id}: {deleted}")
        return deleted


account_service = AccountService()
