from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup import schemas, crud
from lvlup.utils.logger import get_logger

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not found"}}
)

logger = get_logger(__name__)


@router.get("/me", response_model=schemas.UserResponse)
async def get_current_user_info(
    current_user: schemas.CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Get the current user's information"""
    db_user = crud.get_user(db, current_user.id)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user


@router.put("/me", response_model=schemas.UserResponse)
async def update_current_user(
    user_update: schemas.UserUpdate,
    current_user: schemas.CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update the current user's profile (username, display name, bio, avatar, timezone)"""
    db_user = crud.get_user(db, current_user.id)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    try:
        return crud.update_user_fields(db, db_user, user_update.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/me/analytics", response_model=schemas.UserAnalytics)
async def get_my_analytics(
    current_user: schemas.CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Totals shown on the profile page."""
    return crud.get_user_analytics(db, current_user.id)


@router.get("/username/check", response_model=schemas.UsernameAvailability)
async def check_username(
    username: str = Query(..., min_length=3, max_length=30),
    current_user: schemas.CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Check whether a username is free (the caller's own username counts as free)."""
    available = crud.is_username_available(db, username, exclude_user_id=current_user.id)
    return schemas.UsernameAvailability(username=username, available=available)


@router.get("/{username}", response_model=schemas.PublicProfile)
async def get_public_profile(
    username: str,
    current_user: schemas.CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Public profile of another user by username."""
    db_user = crud.get_user_by_username(db, username)
    if not db_user:
        raise HTTPException(status_code=404, detail="User not found")
    return db_user
