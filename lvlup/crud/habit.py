from __future__ import annotations
from typing import Optional, Tuple
from datetime import datetime
from sqlalchemy import func, update
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from lvlup.models.habit import Habit
from lvlup.services.habit_tracker import HabitStreak, complete_habit
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)

EDITABLE_FIELDS = {"title", "description", "frequency", "target_count", "category"}


class HabitNotFound(LookupError):
    """No habit with the given id belongs to the user."""


class PersistenceFailure(RuntimeError):
    """The streak update could not be written; stored state is unchanged."""


class CompletionConflict(PersistenceFailure):
    """Another completion updated the habit between our read and write."""


MAX_COMPLETION_ATTEMPTS = 3


def create_habit(db: Session, user_id: str, habit_data: dict) -> Habit:
    """
    Create a new habit with fresh streak counters.

    Args:
        db: Database session
        user_id: Owner ID
        habit_data: Presentation fields (title, description, frequency, target_count, category)

    Returns:
        Created Habit object
    """
    db_habit = Habit(
        user_id=user_id,
        current_streak=0,
        longest_streak=0,
        last_completed=None,
        **{k: v for k, v in habit_data.items() if k in EDITABLE_FIELDS},
    )
    db.add(db_habit)
    db.commit()
    db.refresh(db_habit)
    return db_habit


def read_habit(db: Session, habit_id: str, user_id: str, for_update: bool = False) -> Optional[Habit]:
    """Get a specific habit by ID for a specific user; `for_update` locks the row and reloads it"""
    query = db.query(Habit).filter(
        Habit.id == habit_id,
        Habit.user_id == user_id
    )
    if for_update:
        query = query.with_for_update().populate_existing()
    return query.first()


def get_habits_by_user(db: Session, user_id: str, category: Optional[str] = None, sort: str = "streak") -> list[Habit]:
    """
    List a user's habits.

    Args:
        db: Database session
        user_id: Owner ID
        category: Only habits in this category; None or "all" for every habit
        sort: "streak" (current streak, highest first), "alphabet" or "created"

    Returns:
        List of Habit objects
    """
    query = db.query(Habit).filter(Habit.user_id == user_id)
    if category and category != "all":
        query = query.filter(Habit.category == category)

    if sort == "alphabet":
        query = query.order_by(func.lower(Habit.title).asc())
    elif sort == "created":
        query = query.order_by(Habit.created_at.asc())
    else:
        query = query.order_by(Habit.current_streak.desc(), Habit.created_at.asc())
    return query.all()


def update_habit(db: Session, habit: Habit, update_data: dict) -> Habit:
    """Update presentation fields. Streak counters are only changed by completions."""
    for field, value in update_data.items():
        if field in EDITABLE_FIELDS:
            setattr(habit, field, value)
    db.commit()
    db.refresh(habit)
    return habit


def delete_habit(db: Session, habit_id: str, user_id: str) -> bool:
    habit = read_habit(db, habit_id, user_id)
    if not habit:
        return False
    db.delete(habit)
    db.commit()
    return True


def write_habit(db: Session, habit: Habit, streak: HabitStreak, expected: Optional[HabitStreak] = None) -> Habit:
    """
    Persist a computed streak state in a single UPDATE.

    current_streak, longest_streak and last_completed are written together.
    When `expected` is given the row is only updated if it still holds that
    state, so a completion computed from a stale read cannot overwrite a newer one.

    Raises:
        HabitNotFound: If the row disappeared before the write
        CompletionConflict: If the row no longer matches `expected`
        PersistenceFailure: If the database rejected the write; the transaction is rolled back
    """
    stmt = update(Habit).where(Habit.id == habit.id, Habit.user_id == habit.user_id)
    if expected is not None:
        stmt = stmt.where(
            Habit.current_streak == expected.current_streak,
            Habit.longest_streak == expected.longest_streak,
            Habit.last_completed.is_(None) if expected.last_completed is None
            else Habit.last_completed == expected.last_completed,
        )
    stmt = stmt.values(
        current_streak=streak.current_streak,
        longest_streak=streak.longest_streak,
        last_completed=streak.last_completed,
    ).execution_options(synchronize_session=False)

    try:
        result = db.execute(stmt)
        if result.rowcount == 0:
            db.rollback()
            if expected is not None and read_habit(db, habit.id, habit.user_id) is not None:
                raise CompletionConflict(f"Habit {habit.id} changed since it was read")
            raise HabitNotFound(habit.id)
        db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Failed to write streak for habit {habit.id}: {e}")
        try:
            db.rollback()
        except SQLAlchemyError as rollback_error:
            logger.error(f"Error during rollback: {rollback_error}")
        raise PersistenceFailure(f"Could not save completion for habit {habit.id}") from e

    db.refresh(habit)
    return habit


def record_completion(
    db: Session, habit_id: str, user_id: str, now: datetime, tz_name: str = "UTC"
) -> Tuple[Habit, HabitStreak]:
    """
    Read the habit, compute its next streak state and write it back.

    The row is locked for the read where the database supports it, and the
    write only applies if the row is unchanged. A completion that loses a race
    with another one is recomputed from the fresh row.

    Returns:
        The updated habit and its streak state before this completion

    Raises:
        HabitNotFound: If the habit does not exist for this user
        UnrecognizedCadence: If the stored frequency is invalid
        PersistenceFailure: If the write fails, or keeps conflicting after retries
    """
    for attempt in range(1, MAX_COMPLETION_ATTEMPTS + 1):
        habit = read_habit(db, habit_id, user_id, for_update=True)
        if not habit:
            raise HabitNotFound(habit_id)

        previous = HabitStreak.from_habit(habit)
        updated = complete_habit(previous, now, tz_name)
        try:
            write_habit(db, habit, updated, expected=previous)
        except CompletionConflict:
            logger.warning(f"Habit {habit_id} changed during completion, retrying (attempt {attempt})")
            continue

        logger.info(
            f"Habit {habit_id} completed by user {user_id}: "
            f"streak {previous.current_streak} -> {updated.current_streak}, "
            f"longest={updated.longest_streak}, last_completed={updated.last_completed}"
        )
        return habit, previous

    raise CompletionConflict(f"Habit {habit_id} kept changing during completion")
