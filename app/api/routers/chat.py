# app/api/routers/chat.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.services.chat import chat_service
from app.models.profile import Profile
from app.schemas.chat import ChatExchange, ChatMessageCreate, ChatRecord
from app.schemas.profile import SuccessResponse

router = APIRouter(prefix="/chat", tags=["Companion Chat"])


@router.post("", response_model=ChatExchange, summary="Send a message to the companion")
def send_message(
    data: ChatMessageCreate,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Send a message and get the companion's reply.

    The companion sees the user's journal entries, moods and the last ten
    messages of the conversation.
    """
    return chat_service.send_message(db, user=current_user, message=data.message)


@router.get("", response_model=List[ChatRecord], summary="Conversation history")
def get_history(
    limit: Optional[int] = Query(None, ge=1, le=500),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return chat_service.get_history(db, user=current_user, limit=limit)


@router.delete("", response_model=SuccessResponse, summary="Clear conversation")
def clear_history(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    deleted = chat_service.clear_history(db, user=current_user)
    return SuccessResponse(message=f"Deleted {deleted} messages")
