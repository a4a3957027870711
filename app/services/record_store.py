# services/record_store.py
import enum
import logging
from typing import Callable, Dict, List, Optional, Type, TypeVar
from uuid import UUID
from datetime import datetime

from pydantic import BaseModel, ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.result import ErrorKind, Result
from app.crud.base import CRUDUserRecord
from app.crud.chat_message import crud_chat_message
from app.crud.insight import crud_insight
from app.crud.journal_entry import crud_journal_entry
from app.crud.mood_entry import crud_mood_entry
from app.schemas.chat import ChatRecord
from app.schemas.insight import InsightRecord
from app.schemas.journal import JournalRecord
from app.schemas.mood import MoodRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordKind(str, enum.Enum):
    mood = "mood"
    journal = "journal"
    chat = "chat"
    insight = "insight"


_CRUD: Dict[RecordKind, CRUDUserRecord] = {
    RecordKind.mood: crud_mood_entry,
    RecordKind.journal: crud_journal_entry,
    RecordKind.chat: crud_chat_message,
    RecordKind.insight: crud_insight,
}

_RECORD: Dict[RecordKind, Type[BaseModel]] = {
    RecordKind.mood: MoodRecord,
    RecordKind.journal: JournalRecord,
    RecordKind.chat: ChatRecord,
    RecordKind.insight: InsightRecord,
}


class RecordStore:
    """
    Typed read access to a user's records.

    Every call returns a ``Result``: database failures and rows that do not
    match their schema become ``ErrorKind.store`` failures instead of
    exceptions, so callers decide how to surface them.
    """

    def fetch(
        self,
        db: Session,
        kind: RecordKind,
        user_id: UUID,
        *,
        since: Optional[datetime] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> Result[List[BaseModel]]:
        """
        Fetch all records of one kind for a user, ordered by created_at.

        Args:
            db: Database session
            kind: Record kind
            user_id: Owning user UUID
            since: Optional inclusive lower bound on created_at
            descending: Newest first when True
            limit: Maximum number of records

        Returns:
            Result holding the typed records
        """
        try:
            rows = _CRUD[kind].list_by_user(
                db, user_id=user_id, since=since, descending=descending, limit=limit
            )
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Failed to fetch {kind.value} records for {user_id}: {exc}")
            return Result.failure(ErrorKind.store, f"Could not load {kind.value} records")

        record_type = _RECORD[kind]
        try:
            records = [record_type.model_validate(row) for row in rows]
        except PydanticValidationError as exc:
            logger.error(f"Malformed {kind.value} row for {user_id}: {exc}")
            return Result.failure(ErrorKind.store, f"Stored {kind.value} records are invalid")

        return Result.success(records)

    def count(self, db: Session, kind: RecordKind, user_id: UUID) -> Result[int]:
        """Count a user's records of one kind."""
        try:
            return Result.success(_CRUD[kind].count_by_user(db, user_id=user_id))
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Failed to count {kind.value} records for {user_id}: {exc}")
            return Result.failure(ErrorKind.store, f"Could not count {kind.value} records")

    def write(self, db: Session, description: str, operation: Callable[[], T]) -> Result[T]:
        """
        Run a CRUD write, turning database failures into a store failure.

        Args:
            db: Database session (rolled back on failure)
            description: What is being written, for logs and notices
            operation: Zero-argument callable performing the write

        Returns:
            Result holding whatever the operation returned
        """
        try:
            return Result.success(operation())
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Failed to {description}: {exc}")
            return Result.failure(ErrorKind.store, f"Could not {description}")

    def count_unread_insights(self, db: Session, user_id: UUID) -> Result[int]:
        try:
            return Result.success(crud_insight.count_unread(db, user_id=user_id))
        except SQLAlchemyError as exc:
            db.rollback()
            logger.error(f"Failed to count unread insights for {user_id}: {exc}")
            return Result.failure(ErrorKind.store, "Could not count unread insights")


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

record_store = RecordStore()
