# services/dashboard.py
import logging
from typing import List, Optional
from datetime import datetime, timedelta, timezone
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.profile import Profile
from app.schemas.stats import (
    CalendarDay,
    GrowthStats,
    OverviewStats,
    SidebarSummary,
)
from app.services import stats
from app.services.record_store import RecordKind, record_store

logger = logging.getLogger(__name__)

STREAK_LOOKBACK = 30
COMMON_THEMES = 6
TOP_THEMES = 5
RECENT_INSIGHTS = 10


class DashboardService:
    """
    Numbers shown on the insights, growth, sidebar and calendar views.

    Every method fetches what it needs through the record store, then hands
    plain lists to the pure functions in ``app.services.stats``.
    """

    def _now(self, now: Optional[datetime]) -> datetime:
        return now or datetime.now(timezone.utc)

    def overview(self, db: Session, *, user: Profile, now: Optional[datetime] = None) -> OverviewStats:
        now = self._now(now)
        window_start = now - timedelta(days=settings.STATS_WINDOW_DAYS)

        total_entries = record_store.count(db, RecordKind.journal, user.id).unwrap()
        moods = record_store.fetch(db, RecordKind.mood, user.id).unwrap()
        journals = record_store.fetch(db, RecordKind.journal, user.id).unwrap()
        chart_moods = record_store.fetch(
            db, RecordKind.mood, user.id, since=window_start, descending=False
        ).unwrap()

        average = stats.compute_average([m.mood_value for m in moods])
        average = round(average, 1) if average is not None else 0.0

        return OverviewStats(
            total_entries=total_entries,
            average_mood=average,
            average_mood_label=stats.mood_label_for(average or None),
            streak=stats.compute_streak(journals[:STREAK_LOOKBACK], now),
            common_themes=[t.theme for t in stats.rank_themes(journals, COMMON_THEMES)],
            mood_chart=stats.mood_chart(chart_moods),
        )

    def growth(self, db: Session, *, user: Profile, now: Optional[datetime] = None) -> GrowthStats:
        now = self._now(now)
        window_start = now - timedelta(days=settings.STATS_WINDOW_DAYS)

        moods = record_store.fetch(
            db, RecordKind.mood, user.id, since=window_start, descending=False
        ).unwrap()
        journals = record_store.fetch(db, RecordKind.journal, user.id).unwrap()
        insights = record_store.fetch(
            db, RecordKind.insight, user.id, limit=RECENT_INSIGHTS
        ).unwrap()

        mood_values = [m.mood_value for m in moods]
        average = stats.compute_average(mood_values)
        recent, prior = stats.split_trend_windows(mood_values, settings.TREND_WINDOW)
        streak = stats.compute_streak(journals, now)
        word_stats = stats.journal_word_stats(journals)

        return GrowthStats(
            current_streak=streak,
            mood_trend=stats.classify_trend(recent, prior, settings.TREND_THRESHOLD),
            average_mood=round(average, 1) if average is not None else None,
            journal=word_stats,
            top_themes=stats.rank_themes(journals, TOP_THEMES),
            recent_insights=insights,
            milestones=stats.milestones(word_stats.total_entries, streak, len(moods)),
        )

    def summary(self, db: Session, *, user: Profile, now: Optional[datetime] = None) -> SidebarSummary:
        """
        Sidebar badges. Each number is loaded independently; a failed load
        shows as zero instead of failing the whole summary.
        """
        now = self._now(now)
        unread = record_store.count_unread_insights(db, user.id)
        journals = record_store.fetch(db, RecordKind.journal, user.id)
        if not (unread.ok and journals.ok):
            logger.warning(f"Partial sidebar summary for {user.id}")

        return SidebarSummary(
            unread_insights=unread.unwrap_or(0),
            current_streak=stats.compute_streak(journals.unwrap_or([]), now),
        )

    def calendar(self, db: Session, *, user: Profile) -> List[CalendarDay]:
        moods = record_store.fetch(db, RecordKind.mood, user.id).unwrap()
        journals = record_store.fetch(db, RecordKind.journal, user.id).unwrap()
        return stats.calendar_days(moods, journals)


dashboard_service = DashboardService()
