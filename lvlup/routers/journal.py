from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup.schemas import CurrentUser, JournalEntryCreate, JournalEntryResponse
from lvlup import crud
from lvlup.services.achievements import evaluate_achievements
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/journal", tags=["journal"])


@router.post("/", response_model=JournalEntryResponse, status_code=201)
async def create_entry(
    entry_in: JournalEntryCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Write a journal entry."""
    entry = crud.create_journal_entry(db, current_user.id, entry_in.title, entry_in.content)
    logger.info(f"Stored journal entry {entry.id} for user {current_user.id}")
    evaluate_achievements(db, current_user.id, "journal")
    return entry


@router.get("/", response_model=List[JournalEntryResponse])
async def list_entries(
    skip: int = Query(0, ge=0),
    limit: int = Query(20, ge=1, le=100),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return crud.get_journal_entries_by_user(db, current_user.id, skip=skip, limit=limit)


@router.get("/{entry_id}", response_model=JournalEntryResponse)
async def get_entry(
    entry_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    entry = crud.get_journal_entry(db, entry_id, current_user.id)
    if not entry:
        raise HTTPException(status_code=404, detail="Journal entry not found")
    return entry


@router.delete("/{entry_id}", status_code=204)
async def delete_entry(
    entry_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not crud.delete_journal_entry(db, entry_id, current_user.id):
        raise HTTPException(status_code=404, detail="Journal entry not found")
