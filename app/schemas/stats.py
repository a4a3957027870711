# schemas/stats.py
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
import enum

from .insight import InsightRecord


class TrendDirection(str, enum.Enum):
    improving = "improving"
    declining = "declining"
    stable = "stable"


class ThemeCount(BaseModel):
    theme: str
    count: int


class MoodChartPoint(BaseModel):
    date: date
    mood: int


class JournalWordStats(BaseModel):
    total_entries: int
    total_words: int
    avg_words_per_entry: int


class Milestone(BaseModel):
    id: int
    title: str
    achieved: bool
    icon: str


class OverviewStats(BaseModel):
    """Insights page numbers."""
    total_entries: int
    average_mood: float
    average_mood_label: str
    streak: int
    common_themes: List[str]
    mood_chart: List[MoodChartPoint]


class GrowthStats(BaseModel):
    """Growth journey page numbers."""
    current_streak: int
    mood_trend: TrendDirection
    average_mood: Optional[float]
    journal: JournalWordStats
    top_themes: List[ThemeCount]
    recent_insights: List[InsightRecord]
    milestones: List[Milestone]


class SidebarSummary(BaseModel):
    unread_insights: int
    current_streak: int


class CalendarDay(BaseModel):
    date: date
    mood_value: Optional[int] = None
    mood_label: Optional[str] = None
    journal_count: int = 0
