# app/api/routers/moods.py
from typing import List, Optional
from uuid import UUID
from datetime import datetime
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.services.mood import mood_service
from app.models.profile import Profile
from app.schemas.mood import MoodEntryCreate, MoodRecord
from app.schemas.profile import SuccessResponse

router = APIRouter(prefix="/moods", tags=["Mood Entries"])


@router.post(
    "",
    response_model=MoodRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Record a mood"
)
def record_mood(
    mood_in: MoodEntryCreate,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Record a mood rating.

    - **mood_value**: 1 (Very Sad) to 5 (Very Happy)
    - **mood_label**: Optional; derived from the value when omitted
    """
    return mood_service.record_mood(db, user=current_user, mood_in=mood_in)


@router.get("", response_model=List[MoodRecord], summary="List my moods")
def list_moods(
    since: Optional[datetime] = Query(None, description="Only moods recorded at or after this time"),
    limit: Optional[int] = Query(None, ge=1, le=500),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Moods newest first."""
    return mood_service.list_moods(db, user=current_user, since=since, limit=limit)


@router.get("/today", response_model=Optional[MoodRecord], summary="Today's latest mood")
def get_today_mood(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return mood_service.get_today_mood(db, user=current_user)


@router.delete("/{mood_id}", response_model=SuccessResponse, summary="Delete a mood")
def delete_mood(
    mood_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    mood_service.delete_mood(db, user=current_user, mood_id=mood_id)
    return SuccessResponse(message="Mood entry deleted")
