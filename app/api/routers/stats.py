# app/api/routers/stats.py
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.services.dashboard import dashboard_service
from app.models.profile import Profile
from app.schemas.stats import CalendarDay, GrowthStats, OverviewStats, SidebarSummary

router = APIRouter(prefix="/stats", tags=["Wellness Statistics"])


@router.get("/overview", response_model=OverviewStats, summary="Insights page numbers")
def overview(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Total entries, average mood, writing streak, common themes and the 30-day mood chart."""
    return dashboard_service.overview(db, user=current_user)


@router.get("/growth", response_model=GrowthStats, summary="Growth journey")
def growth(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Streak, mood trend, journal statistics, top themes, recent insights and milestones."""
    return dashboard_service.growth(db, user=current_user)


@router.get("/summary", response_model=SidebarSummary, summary="Sidebar badges")
def summary(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return dashboard_service.summary(db, user=current_user)


@router.get("/calendar", response_model=List[CalendarDay], summary="Mood calendar")
def calendar(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return dashboard_service.calendar(db, user=current_user)
