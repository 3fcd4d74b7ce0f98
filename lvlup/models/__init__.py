from lvlup.database import Base
from lvlup.models.user import User
from lvlup.models.habit import Habit
from lvlup.models.category import Category
from lvlup.models.goal import Goal
from lvlup.models.journal_entry import JournalEntry
from lvlup.models.focus import TimerSettings, FocusSession
from lvlup.models.achievement import Achievement
from lvlup.models.suggestion import Suggestion

__all__ = [
    "Base", "User", "Habit", "Category", "Goal", "JournalEntry",
    "TimerSettings", "FocusSession", "Achievement", "Suggestion"
]
