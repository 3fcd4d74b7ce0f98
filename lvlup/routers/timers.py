from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime, timezone as dt_timezone

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup.config import settings
from lvlup.schemas import (
    CurrentUser, TimerSettingsUpdate, TimerSettingsResponse, FocusSessionCreate, FocusSessionResponse, FocusStats
)
from lvlup import crud
from lvlup.crud.focus import DEFAULT_TIMER_SETTINGS
from lvlup.services.achievements import evaluate_achievements
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/timers", tags=["timers"])


@router.get("/settings", response_model=TimerSettingsResponse)
async def get_settings(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get timer settings; defaults when the user never saved any."""
    timer_settings = crud.get_timer_settings(db, current_user.id)
    if timer_settings is None:
        return TimerSettingsResponse(**DEFAULT_TIMER_SETTINGS)
    return timer_settings


@router.put("/settings", response_model=TimerSettingsResponse)
async def save_settings(
    settings_in: TimerSettingsUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return crud.upsert_timer_settings(db, current_user.id, settings_in.model_dump(exclude_unset=True, exclude_none=True))


@router.post("/sessions", response_model=FocusSessionResponse, status_code=201)
async def log_session(
    session_in: FocusSessionCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Record a finished pomodoro or deep work session."""
    session = crud.log_focus_session(
        db, current_user.id, session_in.timer_type, session_in.duration_minutes, datetime.now(dt_timezone.utc)
    )
    logger.info(f"Logged {session.timer_type} session of {session.duration_minutes} min for user {current_user.id}")
    evaluate_achievements(db, current_user.id, "focus")
    return session


@router.get("/stats", response_model=FocusStats)
async def get_stats(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Sessions finished today and this week, in the user's timezone."""
    return crud.get_session_counts(
        db, current_user.id, datetime.now(dt_timezone.utc), current_user.timezone or settings.DEFAULT_TIMEZONE
    )
