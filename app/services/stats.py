# services/stats.py
"""
Derived wellness statistics.

Pure functions over records that were already fetched from the record store:
streaks, averages, theme rankings and mood trends. Nothing here touches the
database, the completion service or any module-level state; callers pass in
everything a number depends on, including the reference date.

Records may be ORM rows, pydantic records or plain mappings; only the
``created_at``, ``themes``, ``content`` and ``mood_value`` fields are read.
Dates are compared as UTC calendar days. Naive datetimes are taken to be UTC.
"""
import math
from collections import Counter
from datetime import date, datetime, time, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from app.core.exceptions import UnsortedInputError
from app.schemas.mood import MOOD_LABELS
from app.schemas.stats import (
    CalendarDay,
    JournalWordStats,
    Milestone,
    MoodChartPoint,
    ThemeCount,
    TrendDirection,
)

DEFAULT_TREND_THRESHOLD = 0.5
DEFAULT_TREND_WINDOW = 7

DateLike = Union[date, datetime]


# =====================================================================
# FIELD ACCESS & DATE HELPERS
# =====================================================================

def _field(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def _as_utc(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


def utc_day(value: DateLike) -> date:
    """Calendar day (UTC) of a date or datetime."""
    return _as_utc(value).date()


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# =====================================================================
# STREAKS
# =====================================================================

def compute_streak(entries: Sequence[Any], reference_date: DateLike) -> int:
    """
    Count consecutive active days walking back from ``reference_date``.

    ``entries`` must be ordered newest first. Each entry whose day is at most
    one day away from the running cursor extends the streak and moves the
    cursor to that day; the first larger gap ends the walk. Several entries on
    the same day count once.

    Raises:
        UnsortedInputError: if any entry is newer than the one before it
    """
    stamps = [_as_utc(_field(entry, "created_at")) for entry in entries]
    for position, (newer, older) in enumerate(zip(stamps, stamps[1:]), start=1):
        if older > newer:
            raise UnsortedInputError(
                f"Entries must be sorted newest first (position {position} is newer than {position - 1})"
            )

    cursor = utc_day(reference_date)
    last_counted: Optional[date] = None
    streak = 0

    for stamp in stamps:
        day = stamp.date()
        if day == last_counted:
            continue
        if abs((cursor - day).days) <= 1:
            streak += 1
            cursor = day
            last_counted = day
        else:
            break

    return streak


# =====================================================================
# AVERAGES & TRENDS
# =====================================================================

def compute_average(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or ``None`` when there is nothing to average."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)


def classify_trend(
    recent_window: Sequence[float],
    prior_window: Sequence[float],
    threshold: float = DEFAULT_TREND_THRESHOLD,
) -> TrendDirection:
    """Compare the averages of two windows; a missing window is always stable."""
    recent = compute_average(recent_window)
    prior = compute_average(prior_window)
    if recent is None or prior is None:
        return TrendDirection.stable

    if recent - prior > threshold:
        return TrendDirection.improving
    if prior - recent > threshold:
        return TrendDirection.declining
    return TrendDirection.stable


def split_trend_windows(
    values_ascending: Sequence[float], window: int = DEFAULT_TREND_WINDOW
) -> Tuple[List[float], List[float]]:
    """
    Split oldest-first values into the latest ``window`` values and the
    ``window`` values before them.
    """
    values = list(values_ascending)
    if len(values) < 2 or window <= 0:
        return [], []
    recent = values[-window:]
    prior = values[-2 * window:-window]
    return recent, prior


def mood_label_for(value: Optional[float]) -> str:
    """Label of the mood scale point nearest to ``value``."""
    if value is None:
        return "Unknown"
    index = _round_half_up(value) - 1
    if 0 <= index < len(MOOD_LABELS):
        return MOOD_LABELS[index]
    return "Unknown"


# =====================================================================
# THEMES
# =====================================================================

def rank_themes(entries: Iterable[Any], top_n: int = 5) -> List[ThemeCount]:
    """
    Most frequent journal themes, most common first.

    Ties keep the order in which themes were first seen.
    """
    counts: Counter = Counter()
    for entry in entries:
        for theme in _field(entry, "themes") or []:
            counts[theme] += 1

    if top_n <= 0:
        return []
    return [ThemeCount(theme=theme, count=count) for theme, count in counts.most_common(top_n)]


# =====================================================================
# PAGE AGGREGATES
# =====================================================================

def journal_word_stats(entries: Sequence[Any]) -> JournalWordStats:
    total_words = sum(len((_field(entry, "content") or "").split()) for entry in entries)
    total_entries = len(entries)
    avg = _round_half_up(total_words / total_entries) if total_entries else 0
    return JournalWordStats(
        total_entries=total_entries,
        total_words=total_words,
        avg_words_per_entry=avg,
    )


def milestones(total_entries: int, streak: int, mood_count: int) -> List[Milestone]:
    return [
        Milestone(id=1, title="First Journal Entry", achieved=total_entries > 0, icon="📝"),
        Milestone(id=2, title="7-Day Streak", achieved=streak >= 7, icon="🔥"),
        Milestone(id=3, title="10 Entries", achieved=total_entries >= 10, icon="📚"),
        Milestone(id=4, title="30-Day Streak", achieved=streak >= 30, icon="💎"),
        Milestone(id=5, title="50 Entries", achieved=total_entries >= 50, icon="🏆"),
        Milestone(id=6, title="Mood Tracker", achieved=mood_count >= 7, icon="😊"),
    ]


def mood_chart(moods_ascending: Iterable[Any]) -> List[MoodChartPoint]:
    return [
        MoodChartPoint(date=utc_day(_field(m, "created_at")), mood=_field(m, "mood_value"))
        for m in moods_ascending
    ]


def calendar_days(moods_descending: Iterable[Any], journals: Iterable[Any]) -> List[CalendarDay]:
    """
    One row per day with any activity: the latest mood of the day and the
    number of journal entries written that day. Newest day first.
    """
    days: Dict[date, CalendarDay] = {}

    for mood in moods_descending:
        day = utc_day(_field(mood, "created_at"))
        if day not in days:
            days[day] = CalendarDay(
                date=day,
                mood_value=_field(mood, "mood_value"),
                mood_label=_field(mood, "mood_label"),
            )

    for journal in journals:
        day = utc_day(_field(journal, "created_at"))
        days.setdefault(day, CalendarDay(date=day)).journal_count += 1

    return [days[day] for day in sorted(days, reverse=True)]
