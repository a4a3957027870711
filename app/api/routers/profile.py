# app/api/routers/profile.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.services.profile import profile_service
from app.models.profile import Profile
from app.schemas.profile import ProfileOut, ProfileUpdate

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileOut, summary="Get my profile")
def get_profile(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return profile_service.get_profile(db, current_user.id)


@router.put("", response_model=ProfileOut, summary="Update my display name")
def update_profile(
    data: ProfileUpdate,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update profile settings.

    - **display_name**: Required, cannot be blank
    """
    return profile_service.update_profile(db, current_user, data)
