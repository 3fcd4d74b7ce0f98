from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import Optional
from lvlup.models import User, Habit, Goal, JournalEntry, FocusSession

def get_user(db: Session, user_id: str) -> Optional[User]:
    """Get a user by ID."""
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    """Get a user by username (case-insensitive)."""
    return db.query(User).filter(func.lower(User.username) == func.lower(username)).first()

def is_username_available(db: Session, username: str, exclude_user_id: str = None) -> bool:
    """
    Check if a username is available (unique).

    Args:
        db: Database session
        username: Username to check
        exclude_user_id: User ID to exclude from the check (for updates)

    Returns:
        True if username is available, False otherwise
    """
    query = db.query(User).filter(func.lower(User.username) == username.lower())

    if exclude_user_id:
        query = query.filter(User.id != exclude_user_id)

    return query.first() is None

def create_user(db: Session, user_id: str, email: Optional[str], display_name: Optional[str] = None) -> User:
    """
    Create a new user.

    Args:
        db: Database session
        user_id: Identity-provider UID
        email: User email
        display_name: User display name

    Returns:
        Created User object
    """
    db_user = User(
        id=user_id,
        email=email,
        display_name=display_name,
    )

    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

def update_user_display_name(db: Session, user_id: str, display_name: str) -> Optional[User]:
    """Update only the display name of a user."""
    db_user = get_user(db, user_id)
    if not db_user:
        return None
    db_user.display_name = display_name
    db.commit()
    db.refresh(db_user)
    return db_user

def update_user_fields(db: Session, user: User, update_data: dict) -> User:
    """
    Update user fields with the provided data.

    Handles special validation for username field to ensure uniqueness.
    """
    username = None
    if 'username' in update_data:
        username = update_data.pop('username')
        if username is not None:
            if not is_username_available(db, username, exclude_user_id=user.id):
                raise ValueError(f"Username '{username}' is already taken")

    for field, value in update_data.items():
        if hasattr(user, field):
            setattr(user, field, value)

    if username is not None:
        user.username = username

    db.commit()
    db.refresh(user)
    return user

def get_user_analytics(db: Session, user_id: str) -> dict:
    """
    Aggregate profile statistics for a user.

    Returns:
        Dict with goal, habit, journal and focus totals and the best streak
    """
    total_goals = db.query(func.count(Goal.id)).filter(Goal.user_id == user_id).scalar() or 0
    completed_goals = db.query(func.count(Goal.id)).filter(
        Goal.user_id == user_id, Goal.progress >= 100
    ).scalar() or 0
    total_habits = db.query(func.count(Habit.id)).filter(Habit.user_id == user_id).scalar() or 0
    active_habits = db.query(func.count(Habit.id)).filter(
        Habit.user_id == user_id, Habit.current_streak > 0
    ).scalar() or 0
    longest_streak = db.query(func.max(Habit.longest_streak)).filter(Habit.user_id == user_id).scalar() or 0
    journal_entries = db.query(func.count(JournalEntry.id)).filter(JournalEntry.user_id == user_id).scalar() or 0
    focus_sessions = db.query(func.count(FocusSession.id)).filter(FocusSession.user_id == user_id).scalar() or 0

    return {
        "total_goals": total_goals,
        "completed_goals": completed_goals,
        "total_habits": total_habits,
        "active_habits": active_habits,
        "longest_streak": longest_streak,
        "journal_entries": journal_entries,
        "focus_sessions": focus_sessions,
    }
