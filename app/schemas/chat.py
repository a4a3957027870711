# schemas/chat.py
from pydantic import BaseModel, Field, ConfigDict
from typing import Literal
from datetime import datetime
from uuid import UUID


class ChatMessageCreate(BaseModel):
    message: str = Field(..., min_length=1, description="Message for the companion")


class ChatRecord(BaseModel):
    """Chat message as validated at the record store boundary."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    message_type: Literal["user", "ai"]
    content: str
    created_at: datetime


class ChatExchange(BaseModel):
    """The stored user message and the companion's reply."""
    user_message: ChatRecord
    reply: ChatRecord
