# app/api/routers/insights.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.services.insight import insight_service
from app.models.profile import Profile
from app.schemas.insight import GeneratedInsights, InsightRecord, UnreadCount

router = APIRouter(prefix="/insights", tags=["AI Insights"])


@router.get("", response_model=List[InsightRecord], summary="List my insights")
def list_insights(
    filter_by: str = Query("all", alias="filter", description="all, unread, pattern, mood, growth or advice"),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Insights newest first, optionally filtered by read state or type."""
    return insight_service.list_insights(db, user=current_user, filter_by=filter_by)


@router.get("/unread-count", response_model=UnreadCount, summary="Count unread insights")
def unread_count(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return UnreadCount(unread=insight_service.unread_count(db, user=current_user))


@router.post(
    "/generate",
    response_model=GeneratedInsights,
    status_code=status.HTTP_201_CREATED,
    summary="Generate new insights"
)
def generate_insights(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Generate insights from the ten latest journal entries and twenty latest moods.

    Requires at least one journal entry. When the companion's reply is not
    usable, basic insights are generated from the counts instead.
    """
    return insight_service.generate(db, user=current_user)


@router.patch("/{insight_id}/read", response_model=InsightRecord, summary="Mark an insight as read")
def mark_read(
    insight_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return insight_service.mark_read(db, user=current_user, insight_id=insight_id)
