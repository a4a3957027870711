# schemas/completion.py
from pydantic import BaseModel, Field, field_validator
from typing import Any, List, Optional
import enum


class CompletionType(str, enum.Enum):
    chat = "chat"
    analyze_journal = "analyze_journal"
    generate_insight = "generate_insight"
    generate_insights = "generate_insights"


class CompanionRequest(BaseModel):
    """Body of the companion endpoint."""
    message: str = Field(..., min_length=1)
    context: Optional[Any] = None
    type: CompletionType = CompletionType.chat


class CompanionResponse(BaseModel):
    response: str


class JournalAnalysis(BaseModel):
    """Structured reply to an ``analyze_journal`` request."""
    sentiment_score: float = 0
    themes: List[str] = Field(default_factory=list)
    insights: str = ""
    reflection_questions: List[str] = Field(default_factory=list)

    @field_validator('sentiment_score')
    @classmethod
    def clamp_sentiment(cls, v: float) -> float:
        return max(-1.0, min(1.0, v))

    @field_validator('themes')
    @classmethod
    def limit_themes(cls, v: List[str]) -> List[str]:
        return [t.strip() for t in v if t and t.strip()][:5]

    @classmethod
    def default(cls, raw_text: str = "") -> "JournalAnalysis":
        """Fixed analysis substituted when the reply cannot be parsed."""
        return cls(
            sentiment_score=0,
            themes=["reflection"],
            insights=raw_text,
            reflection_questions=["How did writing this make you feel?"],
        )
