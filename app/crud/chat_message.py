# crud/chat_message.py
from app.crud.base import CRUDUserRecord
from app.models.chat_message import ChatMessage


class CRUDChatMessage(CRUDUserRecord[ChatMessage]):
    """CRUD operations for ChatMessage model."""
    pass


crud_chat_message = CRUDChatMessage(ChatMessage)
