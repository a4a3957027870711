# services/chat.py
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session

from app.crud.chat_message import crud_chat_message
from app.models.profile import Profile
from app.schemas.chat import ChatExchange, ChatRecord
from app.schemas.completion import CompletionType
from app.services.completion import companion_service
from app.services.record_store import RecordKind, record_store

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "I apologize, but I encountered an issue processing your message. Please try again."
)
HISTORY_LENGTH = 10


class ChatService:
    """Conversation with the companion."""

    def build_context(self, db: Session, user: Profile) -> Dict[str, Any]:
        """Everything the companion may draw on: journals, moods, name and recent history."""
        journals = record_store.fetch(db, RecordKind.journal, user.id).unwrap()
        moods = record_store.fetch(db, RecordKind.mood, user.id).unwrap()
        history = record_store.fetch(
            db, RecordKind.chat, user.id, limit=HISTORY_LENGTH
        ).unwrap()

        return {
            "allJournalEntries": [
                j.model_dump(
                    mode="json",
                    include={"content", "title", "themes", "sentiment_score",
                             "mood_label", "mood_value", "created_at"},
                )
                for j in journals
            ],
            "allMoodEntries": [
                m.model_dump(mode="json", include={"mood_value", "mood_label", "created_at"})
                for m in moods
            ],
            "userProfile": {"display_name": user.display_name},
            "conversationHistory": [
                {"type": m.message_type, "content": m.content} for m in reversed(history)
            ],
            "totalEntries": len(journals),
            "totalMoods": len(moods),
        }

    def _save(self, db: Session, user: Profile, message_type: str, content: str) -> ChatRecord:
        row = record_store.write(
            db,
            f"save {message_type} message",
            lambda: crud_chat_message.create(
                db, user_id=user.id, obj_in={"message_type": message_type, "content": content}
            ),
        ).unwrap()
        return ChatRecord.model_validate(row)

    def send_message(self, db: Session, *, user: Profile, message: str) -> ChatExchange:
        """
        Store the user's message, ask the companion, store and return its reply.

        Raises:
            TransientStoreError: If messages or context cannot be read or written
            CompletionServiceError: If the companion cannot be reached
        """
        content = message.strip()
        context = self.build_context(db, user)
        user_message = self._save(db, user, "user", content)

        reply = companion_service.complete(CompletionType.chat, content, context).unwrap()
        if not reply or not reply.strip():
            logger.warning(f"Empty companion reply for {user.id}")
            reply = FALLBACK_REPLY

        ai_message = self._save(db, user, "ai", reply.strip())
        return ChatExchange(user_message=user_message, reply=ai_message)

    def get_history(
        self, db: Session, *, user: Profile, limit: Optional[int] = None
    ) -> List[ChatRecord]:
        """Conversation oldest first, optionally only the latest ``limit`` messages."""
        messages = record_store.fetch(db, RecordKind.chat, user.id, limit=limit).unwrap()
        return list(reversed(messages))

    def clear_history(self, db: Session, *, user: Profile) -> int:
        return record_store.write(
            db, "clear chat history", lambda: crud_chat_message.delete_by_user_id(db, user_id=user.id)
        ).unwrap()


chat_service = ChatService()
