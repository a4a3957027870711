# app/api/routers/account.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.services.account import account_service, export_filename
from app.models.profile import Profile
from app.schemas.profile import SuccessResponse

router = APIRouter(prefix="/account", tags=["Account Data"])


@router.get("/export", summary="Download all my data")
def export_data(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Profile, journal entries, moods, chat messages and insights as one JSON file."""
    now = datetime.now(timezone.utc)
    payload = account_service.export_data(db, user=current_user, now=now)
    return JSONResponse(
        content=payload,
        headers={"Content-Disposition": f'attachment; filename="{export_filename(now)}"'},
    )


@router.delete("/data", response_model=SuccessResponse, summary="Delete all my data")
def delete_all_data(
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Irreversibly delete every journal entry, mood, chat message and insight."""
    deleted = account_service.delete_all_data(db, user=current_user)
    return SuccessResponse(message=f"All data deleted successfully ({sum(deleted.values())} records)")
