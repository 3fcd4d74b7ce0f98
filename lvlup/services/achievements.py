from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, List
from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from lvlup.models import Achievement, Habit, Goal, JournalEntry, FocusSession
from lvlup.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AchievementDefinition:
    code: str
    title: str
    description: str
    icon: str
    trigger: str  # habit, goal, journal, focus
    check: Callable[[Session, str], bool]


def _max_streak(db: Session, user_id: str) -> int:
    return db.query(func.max(Habit.longest_streak)).filter(Habit.user_id == user_id).scalar() or 0


def _streak_at_least(days: int) -> Callable[[Session, str], bool]:
    return lambda db, user_id: _max_streak(db, user_id) >= days


CATALOG: List[AchievementDefinition] = [
    AchievementDefinition(
        code="first_habit_completion",
        title="Premier pas",
        description="Complete a habit for the first time",
        icon="🌱",
        trigger="habit",
        check=_streak_at_least(1),
    ),
    AchievementDefinition(
        code="streak_7",
        title="Une semaine solide",
        description="Reach a streak of 7 on any habit",
        icon="🔥",
        trigger="habit",
        check=_streak_at_least(7),
    ),
    AchievementDefinition(
        code="streak_30",
        title="Habitude ancrée",
        description="Reach a streak of 30 on any habit",
        icon="🏆",
        trigger="habit",
        check=_streak_at_least(30),
    ),
    AchievementDefinition(
        code="streak_100",
        title="Centurion",
        description="Reach a streak of 100 on any habit",
        icon="💯",
        trigger="habit",
        check=_streak_at_least(100),
    ),
    AchievementDefinition(
        code="first_goal_completed",
        title="Objectif atteint",
        description="Bring a goal to 100% progress",
        icon="🎯",
        trigger="goal",
        check=lambda db, user_id: db.query(Goal).filter(Goal.user_id == user_id, Goal.progress >= 100).first() is not None,
    ),
    AchievementDefinition(
        code="first_journal_entry",
        title="Cher journal",
        description="Write your first journal entry",
        icon="📓",
        trigger="journal",
        check=lambda db, user_id: db.query(JournalEntry).filter(JournalEntry.user_id == user_id).first() is not None,
    ),
    AchievementDefinition(
        code="focus_10_sessions",
        title="Concentré",
        description="Finish 10 focus sessions",
        icon="⏱️",
        trigger="focus",
        check=lambda db, user_id: db.query(FocusSession).filter(FocusSession.user_id == user_id).count() >= 10,
    ),
]

CATALOG_BY_CODE: Dict[str, AchievementDefinition] = {a.code: a for a in CATALOG}


def get_earned_achievements(db: Session, user_id: str) -> Dict[str, Achievement]:
    rows = db.query(Achievement).filter(Achievement.user_id == user_id).all()
    return {row.code: row for row in rows}


def evaluate_achievements(db: Session, user_id: str, trigger: str) -> List[AchievementDefinition]:
    """
    Award every not-yet-earned achievement of the given trigger whose condition holds.

    Awards are unique per (user, code); a concurrent duplicate insert is ignored.

    Returns:
        Definitions of the achievements newly awarded by this call
    """
    earned = get_earned_achievements(db, user_id)
    awarded: List[AchievementDefinition] = []

    for definition in CATALOG:
        if definition.trigger != trigger or definition.code in earned:
            continue
        if not definition.check(db, user_id):
            continue
        try:
            db.add(Achievement(user_id=user_id, code=definition.code))
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Achievement {definition.code} already awarded to user {user_id}")
            continue
        awarded.append(definition)
        logger.info(f"Awarded achievement {definition.code} to user {user_id}")

    return awarded
