from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup.schemas import CurrentUser, GoalCreate, GoalUpdate, GoalProgressUpdate, GoalResponse
from lvlup import crud
from lvlup.services.achievements import evaluate_achievements
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("/", response_model=List[GoalResponse])
async def list_goals(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """List goals, newest first."""
    return crud.get_goals_by_user(db, current_user.id)


@router.post("/", response_model=GoalResponse, status_code=201)
async def create_goal(
    goal_in: GoalCreate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = crud.create_goal(db, current_user.id, goal_in.title, goal_in.description)
    logger.info(f"Created goal {goal.id} for user {current_user.id}")
    return goal


@router.put("/{goal_id}", response_model=GoalResponse)
async def update_goal(
    goal_id: str,
    goal_in: GoalUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    goal = crud.get_goal(db, goal_id, current_user.id)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    goal = crud.update_goal(db, goal, goal_in.model_dump(exclude_unset=True))
    if goal.is_completed:
        evaluate_achievements(db, current_user.id, "goal")
    return goal


@router.patch("/{goal_id}/progress", response_model=GoalResponse)
async def update_goal_progress(
    goal_id: str,
    progress_in: GoalProgressUpdate,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set a goal's completion percentage."""
    goal = crud.get_goal(db, goal_id, current_user.id)
    if not goal:
        raise HTTPException(status_code=404, detail="Goal not found")
    goal = crud.update_goal_progress(db, goal, progress_in.progress)
    if goal.is_completed:
        evaluate_achievements(db, current_user.id, "goal")
    return goal


@router.delete("/{goal_id}", status_code=204)
async def delete_goal(
    goal_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    if not crud.delete_goal(db, goal_id, current_user.id):
        raise HTTPException(status_code=404, detail="Goal not found")
