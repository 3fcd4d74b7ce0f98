from lvlup.crud.user import (
    get_user,
    get_user_by_email,
    get_user_by_username,
    is_username_available,
    create_user,
    update_user_display_name,
    update_user_fields,
    get_user_analytics,
)
from lvlup.crud.habit import (
    HabitNotFound,
    PersistenceFailure,
    CompletionConflict,
    create_habit,
    read_habit,
    get_habits_by_user,
    update_habit,
    delete_habit,
    write_habit,
    record_completion,
)
from lvlup.crud.category import (
    get_categories_by_user,
    create_category,
    delete_category,
)
from lvlup.crud.goal import (
    create_goal,
    get_goals_by_user,
    get_goal,
    update_goal,
    update_goal_progress,
    delete_goal,
)
from lvlup.crud.journal import (
    create_journal_entry,
    get_journal_entries_by_user,
    get_journal_entry,
    delete_journal_entry,
)
from lvlup.crud.focus import (
    get_timer_settings,
    upsert_timer_settings,
    log_focus_session,
    get_session_counts,
)
from lvlup.crud.suggestion import create_suggestion

__all__ = [
    # User operations
    "get_user",
    "get_user_by_email",
    "get_user_by_username",
    "is_username_available",
    "create_user",
    "update_user_display_name",
    "update_user_fields",
    "get_user_analytics",

    # Habit operations
    "HabitNotFound",
    "PersistenceFailure",
    "CompletionConflict",
    "create_habit",
    "read_habit",
    "get_habits_by_user",
    "update_habit",
    "delete_habit",
    "write_habit",
    "record_completion",

    # Category operations
    "get_categories_by_user",
    "create_category",
    "delete_category",

    # Goal operations
    "create_goal",
    "get_goals_by_user",
    "get_goal",
    "update_goal",
    "update_goal_progress",
    "delete_goal",

    # Journal operations
    "create_journal_entry",
    "get_journal_entries_by_user",
    "get_journal_entry",
    "delete_journal_entry",

    # Focus timer operations
    "get_timer_settings",
    "upsert_timer_settings",
    "log_focus_session",
    "get_session_counts",

    # Suggestion operations
    "create_suggestion",
]
