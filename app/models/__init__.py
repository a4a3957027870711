# app/models/__init__.py

from app.core.config import Base

# Import all models here so metadata.create_all and app-wide imports work
from .profile import Profile
from .mood_entry import MoodEntry
from .journal_entry import JournalEntry
from .chat_message import ChatMessage
from .insight import Insight, InsightType

__all__ = [
    "Base",
    "Profile",
    "MoodEntry",
    "JournalEntry",
    "ChatMessage",
    "Insight",
    "InsightType",
]
