# app/schemas/__init__.py

from .profile import (
    RegisterRequest,
    LoginRequest,
    RefreshTokenRequest,
    ProfileUpdate,
    ProfileOut,
    TokenResponse,
    SuccessResponse,
)
from .mood import MOOD_LABELS, MoodEntryCreate, MoodRecord
from .journal import JournalEntryCreate, JournalEntryUpdate, JournalRecord, JournalSaved
from .chat import ChatMessageCreate, ChatRecord, ChatExchange
from .insight import InsightType, InsightDraft, InsightRecord, GeneratedInsights, UnreadCount
from .completion import CompletionType, CompanionRequest, CompanionResponse, JournalAnalysis
from .stats import (
    TrendDirection,
    ThemeCount,
    MoodChartPoint,
    JournalWordStats,
    Milestone,
    OverviewStats,
    GrowthStats,
    SidebarSummary,
    CalendarDay,
)


__all__ = [
    # Profile & auth
    "RegisterRequest", "LoginRequest", "RefreshTokenRequest",
    "ProfileUpdate", "ProfileOut", "TokenResponse", "SuccessResponse",

    # Records
    "MOOD_LABELS", "MoodEntryCreate", "MoodRecord",
    "JournalEntryCreate", "JournalEntryUpdate", "JournalRecord", "JournalSaved",
    "ChatMessageCreate", "ChatRecord", "ChatExchange",
    "InsightType", "InsightDraft", "InsightRecord", "GeneratedInsights", "UnreadCount",

    # Completion service
    "CompletionType", "CompanionRequest", "CompanionResponse", "JournalAnalysis",

    # Derived statistics
    "TrendDirection", "ThemeCount", "MoodChartPoint", "JournalWordStats", "Milestone",
    "OverviewStats", "GrowthStats", "SidebarSummary", "CalendarDay",
]
