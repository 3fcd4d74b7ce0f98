from __future__ import annotations
from typing import Optional
from sqlalchemy.orm import Session
from lvlup.models.goal import Goal


def create_goal(db: Session, user_id: str, title: str, description: Optional[str] = None) -> Goal:
    """Create a goal with zero progress."""
    db_goal = Goal(user_id=user_id, title=title, description=description, progress=0)
    db.add(db_goal)
    db.commit()
    db.refresh(db_goal)
    return db_goal


def get_goals_by_user(db: Session, user_id: str) -> list[Goal]:
    """Get a user's goals, newest first."""
    return db.query(Goal).filter(Goal.user_id == user_id).order_by(Goal.created_at.desc()).all()


def get_goal(db: Session, goal_id: str, user_id: str) -> Optional[Goal]:
    return db.query(Goal).filter(Goal.id == goal_id, Goal.user_id == user_id).first()


def update_goal(db: Session, goal: Goal, update_data: dict) -> Goal:
    for field in ("title", "description", "progress"):
        if field in update_data:
            setattr(goal, field, update_data[field])
    db.commit()
    db.refresh(goal)
    return goal


def update_goal_progress(db: Session, goal: Goal, progress: int) -> Goal:
    """Set goal progress, clamped to 0-100."""
    goal.progress = max(0, min(100, progress))
    db.commit()
    db.refresh(goal)
    return goal


def delete_goal(db: Session, goal_id: str, user_id: str) -> bool:
    goal = get_goal(db, goal_id, user_id)
    if not goal:
        return False
    db.delete(goal)
    db.commit()
    return True
