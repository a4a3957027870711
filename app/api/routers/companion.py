# app/api/routers/companion.py
from fastapi import APIRouter, Depends

from app.core.security import get_current_user
from app.services.completion import companion_service
from app.models.profile import Profile
from app.schemas.completion import CompanionRequest

router = APIRouter(prefix="/companion", tags=["Companion"])


@router.post(
    "",
    response_model=None,
    summary="Raw companion request"
)
def companion(
    request: CompanionRequest,
    current_user: Profile = Depends(get_current_user),
):
    """
    Forward a prompt to the companion.

    - **type**: chat, analyze_journal, generate_insight or generate_insights
    - **context**: Optional JSON used to personalize the prompt

    ``analyze_journal`` answers with sentiment, themes, insights and reflection
    questions (a fixed default when the reply cannot be parsed); every other
    type answers with ``{"response": text}``.
    """
    return companion_service.handle(request)
