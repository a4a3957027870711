# services/insight.py
import logging
from typing import List, Sequence
from uuid import UUID
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.crud.insight import crud_insight
from app.models.profile import Profile
from app.schemas.completion import CompletionType
from app.schemas.insight import (
    GeneratedInsights,
    InsightDraft,
    InsightRecord,
    InsightType,
)
from app.schemas.journal import JournalRecord
from app.schemas.mood import MoodRecord
from app.services.completion import companion_service, parse_generated_insights
from app.services.record_store import RecordKind, record_store
from app.services.stats import compute_average

logger = logging.getLogger(__name__)

INSIGHT_FILTERS = {"all", "unread"} | {t.value for t in InsightType}
JOURNAL_SAMPLE = 10
MOOD_SAMPLE = 20


def fallback_insights(
    journals: Sequence[JournalRecord], moods: Sequence[MoodRecord]
) -> List[InsightDraft]:
    """Basic insights built from counts alone, used when the companion's reply is unusable."""
    drafts = [
        InsightDraft(
            title="Emotional Journey Analysis",
            content=(
                f"Based on your {len(journals)} journal entries, you've been actively engaging "
                "in self-reflection. This is a positive step towards emotional wellness."
            ),
            type=InsightType.pattern,
            data={"entryCount": len(journals)},
        ),
        InsightDraft(
            title="Growth Opportunity",
            content=(
                "Consistent journaling shows your commitment to personal growth. Consider setting "
                "specific emotional wellness goals to track your progress."
            ),
            type=InsightType.growth,
        ),
    ]

    avg_mood = compute_average([m.mood_value for m in moods])
    if avg_mood is not None:
        outlook = (
            "You generally maintain a positive outlook!"
            if avg_mood >= 3
            else "Consider exploring strategies to boost your emotional wellbeing."
        )
        drafts.append(
            InsightDraft(
                title="Mood Pattern Insight",
                content=f"Your average mood rating is {avg_mood:.1f}/5. {outlook}",
                type=InsightType.mood,
                data={"averageMood": avg_mood},
            )
        )
    return drafts


class InsightService:
    """Generated insights: creation round trip, listing and the read flag."""

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def list_insights(
        self, db: Session, *, user: Profile, filter_by: str = "all"
    ) -> List[InsightRecord]:
        """
        List insights newest first.

        ``filter_by`` is ``all``, ``unread`` or one of the insight types.
        """
        if filter_by not in INSIGHT_FILTERS:
            raise ValidationError(f"Unknown insight filter '{filter_by}'")

        insights = record_store.fetch(db, RecordKind.insight, user.id).unwrap()
        if filter_by == "all":
            return insights
        if filter_by == "unread":
            return [i for i in insights if not i.is_read]
        return [i for i in insights if i.insight_type.value == filter_by]

    def unread_count(self, db: Session, *, user: Profile) -> int:
        return record_store.count_unread_insights(db, user.id).unwrap()

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def mark_read(self, db: Session, *, user: Profile, insight_id: UUID) -> InsightRecord:
        insight = crud_insight.get_for_user(db, id=insight_id, user_id=user.id)
        if not insight:
            raise NotFoundError("Insight not found")

        row = record_store.write(
            db, "mark insight read", lambda: crud_insight.mark_read(db, db_obj=insight)
        ).unwrap()
        return InsightRecord.model_validate(row)

    # =====================================================================
    # GENERATION
    # =====================================================================

    def generate(self, db: Session, *, user: Profile) -> GeneratedInsights:
        """
        Ask the companion for new insights and store them.

        Raises:
            ValidationError: If the user has no journal entries yet
            CompletionServiceError: If the companion cannot be reached
        """
        journals = record_store.fetch(
            db, RecordKind.journal, user.id, limit=JOURNAL_SAMPLE
        ).unwrap()
        if not journals:
            raise ValidationError(
                "No journal entries",
                notice="Write at least one journal entry to generate insights.",
            )
        moods = record_store.fetch(db, RecordKind.mood, user.id, limit=MOOD_SAMPLE).unwrap()

        message = (
            "Generate personalized insights about my emotional wellness journey. "
            f"I have {len(journals)} journal entries and {len(moods)} mood entries."
        )
        context = {
            "journalEntries": [j.model_dump(mode="json") for j in journals],
            "moodEntries": [m.model_dump(mode="json") for m in moods],
            "userId": str(user.id),
        }
        reply = companion_service.complete(
            CompletionType.generate_insights, message, context
        ).unwrap()

        drafts = parse_generated_insights(reply)
        from_fallback = drafts is None
        if from_fallback:
            drafts = fallback_insights(journals, moods)

        saved = []
        for draft in drafts:
            row = record_store.write(
                db,
                "save insight",
                lambda draft=draft: crud_insight.create(
                    db,
                    user_id=user.id,
                    obj_in={
                        "title": draft.title,
                        "content": draft.content,
                        "insight_type": draft.type.value,
                        "data": draft.data,
                    },
                ),
            ).unwrap()
            saved.append(InsightRecord.model_validate(row))

        logger.info(
            f"Generated {len(saved)} insights for {user.id} (fallback={from_fallback})"
        )
        return GeneratedInsights(generated=len(saved), from_fallback=from_fallback, insights=saved)


# =====================================================================
# SINGLETON INSTANCE
# =====================================================================

insight_service = InsightService()
