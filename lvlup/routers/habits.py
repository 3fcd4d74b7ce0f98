from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, timezone as dt_timezone

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup.config import settings
from lvlup.schemas import (
    CurrentUser, HabitCreate, HabitUpdate, HabitResponse, HabitCompletionResponse, EarnedAchievement
)
from lvlup.crud import habit as habit_crud
from lvlup.crud.habit import HabitNotFound, PersistenceFailure
from lvlup.middleware.rate_limit import rate_limit_api_write
from lvlup.services.habit_tracker import HabitStreak, UnrecognizedCadence, effective_streak, local_date
from lvlup.services.achievements import evaluate_achievements
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/habits", tags=["habits"])


def _user_tz(current_user: CurrentUser) -> str:
    return current_user.timezone or settings.DEFAULT_TIMEZONE


def _habit_response(habit, today) -> HabitResponse:
    """Build the response including the streak as it stands today."""
    response = HabitResponse.model_validate(habit)
    try:
        response.effective_streak = effective_streak(HabitStreak.from_habit(habit), today)
    except UnrecognizedCadence:
        logger.warning(f"Habit {habit.id} has unrecognized frequency {habit.frequency!r}")
        response.effective_streak = 0
    response.is_on_track = response.effective_streak > 0
    return response


@router.get("/", response_model=List[HabitResponse])
async def list_habits(
    category: Optional[str] = Query(None, description="Category name, or 'all'"),
    sort: str = Query("streak", pattern=r"^(streak|alphabet|created)$"),
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List the current user's habits."""
    habits = habit_crud.get_habits_by_user(db, current_user.id, category=category, sort=sort)
    today = local_date(datetime.now(dt_timezone.utc), _user_tz(current_user))
    return [_habit_response(h, today) for h in habits]


@router.post("/", response_model=HabitResponse, status_code=201)
async def create_habit(
    habit_in: HabitCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a habit with empty streak counters."""
    habit = habit_crud.create_habit(db, current_user.id, habit_in.model_dump(mode="json"))
    logger.info(f"Created habit {habit.id} ({habit.frequency}) for user {current_user.id}")
    today = local_date(datetime.now(dt_timezone.utc), _user_tz(current_user))
    return _habit_response(habit, today)


@router.get("/{habit_id}", response_model=HabitResponse)
async def get_habit(
    habit_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    habit = habit_crud.read_habit(db, habit_id, current_user.id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    today = local_date(datetime.now(dt_timezone.utc), _user_tz(current_user))
    return _habit_response(habit, today)


@router.put("/{habit_id}", response_model=HabitResponse)
async def update_habit(
    habit_id: str,
    habit_in: HabitUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Edit a habit's title, description, frequency, target or category."""
    habit = habit_crud.read_habit(db, habit_id, current_user.id)
    if not habit:
        raise HTTPException(status_code=404, detail="Habit not found")
    habit = habit_crud.update_habit(db, habit, habit_in.model_dump(mode="json", exclude_unset=True))
    today = local_date(datetime.now(dt_timezone.utc), _user_tz(current_user))
    return _habit_response(habit, today)


@router.delete("/{habit_id}", status_code=204)
async def delete_habit(
    habit_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not habit_crud.delete_habit(db, habit_id, current_user.id):
        raise HTTPException(status_code=404, detail="Habit not found")
    logger.info(f"Deleted habit {habit_id} for user {current_user.id}")


@router.post("/{habit_id}/complete", response_model=HabitCompletionResponse)
@rate_limit_api_write
async def complete_habit(
    habit_id: str,
    request: Request,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Mark a habit as completed now.

    The streak grows when the previous completion is within the habit's grace
    window (1 day daily, 7 weekly, 30 monthly) and restarts at 1 otherwise.
    """
    now = datetime.now(dt_timezone.utc)
    tz_name = _user_tz(current_user)

    try:
        habit, previous = habit_crud.record_completion(db, habit_id, current_user.id, now, tz_name)
    except HabitNotFound:
        raise HTTPException(status_code=404, detail="Habit not found")
    except UnrecognizedCadence as e:
        logger.error(f"Cannot complete habit {habit_id}: {e}")
        raise HTTPException(status_code=422, detail=str(e))
    except PersistenceFailure as e:
        logger.error(f"Completion of habit {habit_id} not saved for user {current_user.id}: {e}")
        raise HTTPException(status_code=503, detail="Could not save completion, please try again")

    try:
        awarded = evaluate_achievements(db, current_user.id, "habit")
    except Exception as e:
        # The completion is already stored; achievements are re-evaluated on the next one
        logger.exception(f"Achievement evaluation failed for user {current_user.id}: {e}")
        awarded = []

    return HabitCompletionResponse(
        habit=_habit_response(habit, local_date(now, tz_name)),
        previous_streak=previous.current_streak,
        streak_reset=habit.current_streak == 1 and previous.current_streak > 0,
        new_achievements=[
            EarnedAchievement(code=a.code, title=a.title, description=a.description, icon=a.icon)
            for a in awarded
        ],
    )
