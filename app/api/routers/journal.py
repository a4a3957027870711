# app/api/routers/journal.py
from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import get_current_user
from app.services.journal import journal_service
from app.models.profile import Profile
from app.schemas.journal import (
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalRecord,
    JournalSaved,
)
from app.schemas.profile import SuccessResponse

router = APIRouter(prefix="/journal", tags=["Journal"])


# ====================================================
# CREATE & UPDATE
# ====================================================

@router.post(
    "",
    response_model=JournalSaved,
    status_code=status.HTTP_201_CREATED,
    summary="Write a journal entry"
)
def create_entry(
    data: JournalEntryCreate,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Save a journal entry.

    The content is analyzed for sentiment and themes first. If analysis is
    unavailable the entry is saved anyway and ``analysis`` is null.
    """
    return journal_service.create_entry(db, user=current_user, data=data)


@router.put("/{entry_id}", response_model=JournalSaved, summary="Edit a journal entry")
def update_entry(
    entry_id: UUID,
    data: JournalEntryUpdate,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.update_entry(db, user=current_user, entry_id=entry_id, data=data)


# ====================================================
# READ & DELETE
# ====================================================

@router.get("", response_model=List[JournalRecord], summary="List my journal entries")
def list_entries(
    limit: Optional[int] = Query(None, ge=1, le=500),
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.list_entries(db, user=current_user, limit=limit)


@router.get("/{entry_id}", response_model=JournalRecord, summary="Get a journal entry")
def get_entry(
    entry_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return journal_service.get_entry(db, user=current_user, entry_id=entry_id)


@router.delete("/{entry_id}", response_model=SuccessResponse, summary="Delete a journal entry")
def delete_entry(
    entry_id: UUID,
    current_user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    journal_service.delete_entry(db, user=current_user, entry_id=entry_id)
    return SuccessResponse(message="Entry deleted successfully")
