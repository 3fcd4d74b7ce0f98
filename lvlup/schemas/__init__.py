from lvlup.schemas.user import (
    UserBase, UserUpdate, UserResponse, PublicProfile, CurrentUser,
    UsernameAvailability, UserAnalytics
)
from lvlup.schemas.habit import (
    HabitCreate, HabitUpdate, HabitResponse, HabitCompletionResponse, EarnedAchievement
)
from lvlup.schemas.category import CategoryCreate, CategoryResponse
from lvlup.schemas.goal import GoalCreate, GoalUpdate, GoalProgressUpdate, GoalResponse
from lvlup.schemas.journal import JournalEntryCreate, JournalEntryResponse
from lvlup.schemas.timer import (
    TimerSettingsUpdate, TimerSettingsResponse, FocusSessionCreate, FocusSessionResponse, FocusStats
)
from lvlup.schemas.achievement import AchievementResponse
from lvlup.schemas.suggestion import SuggestionRequest, SuggestionResponse

__all__ = [
    "UserBase", "UserUpdate", "UserResponse", "PublicProfile", "CurrentUser",
    "UsernameAvailability", "UserAnalytics",
    "HabitCreate", "HabitUpdate", "HabitResponse", "HabitCompletionResponse", "EarnedAchievement",
    "CategoryCreate", "CategoryResponse",
    "GoalCreate", "GoalUpdate", "GoalProgressUpdate", "GoalResponse",
    "JournalEntryCreate", "JournalEntryResponse",
    "TimerSettingsUpdate", "TimerSettingsResponse", "FocusSessionCreate", "FocusSessionResponse", "FocusStats",
    "AchievementResponse",
    "SuggestionRequest", "SuggestionResponse",
]
