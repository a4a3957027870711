# crud/mood_entry.py
from app.crud.base import CRUDUserRecord
from app.models.mood_entry import MoodEntry


class CRUDMoodEntry(CRUDUserRecord[MoodEntry]):
    """CRUD operations for MoodEntry model."""
    pass


crud_mood_entry = CRUDMoodEntry(MoodEntry)
