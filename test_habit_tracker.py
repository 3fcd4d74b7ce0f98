from datetime import date, datetime, timedelta, timezone

import pytest

from lvlup.services.habit_tracker import (
    Cadence,
    HabitStreak,
    UnrecognizedCadence,
    complete_habit,
    effective_streak,
    grace_window,
    local_date,
)

NOW = datetime(2026, 10, 17, 15, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def days_ago(n):
    return TODAY - timedelta(days=n)


def test_daily_completed_yesterday_accumulates():
    habit = HabitStreak("daily", current_streak=3, longest_streak=5, last_completed=days_ago(1))
    result = complete_habit(habit, NOW)
    assert result.current_streak == 4
    assert result.longest_streak == 5
    assert result.last_completed == TODAY


def test_daily_gap_of_three_days_resets():
    habit = HabitStreak("daily", current_streak=3, longest_streak=5, last_completed=days_ago(3))
    result = complete_habit(habit, NOW)
    assert result.current_streak == 1
    assert result.longest_streak == 5
    assert result.last_completed == TODAY


def test_weekly_within_window_accumulates():
    habit = HabitStreak("weekly", current_streak=2, longest_streak=2, last_completed=days_ago(6))
    assert complete_habit(habit, NOW).current_streak == 3


def test_weekly_past_window_resets():
    habit = HabitStreak("weekly", current_streak=2, longest_streak=2, last_completed=days_ago(9))
    assert complete_habit(habit, NOW).current_streak == 1


def test_first_completion_starts_at_one():
    habit = HabitStreak("daily")
    result = complete_habit(habit, NOW)
    assert result.current_streak == 1
    assert result.longest_streak == 1
    assert result.last_completed == TODAY


def test_first_completion_keeps_higher_longest():
    habit = HabitStreak("monthly", current_streak=0, longest_streak=4)
    result = complete_habit(habit, NOW)
    assert result.current_streak == 1
    assert result.longest_streak == 4


def test_monthly_thirty_day_boundary_is_inclusive():
    habit = HabitStreak("monthly", current_streak=10, longest_streak=10, last_completed=days_ago(30))
    result = complete_habit(habit, NOW)
    assert result.current_streak == 11
    assert result.longest_streak == 11


@pytest.mark.parametrize("frequency,window", [("daily", 1), ("weekly", 7), ("monthly", 30)])
def test_grace_window_edges(frequency, window):
    on_time = HabitStreak(frequency, current_streak=5, longest_streak=5, last_completed=days_ago(window))
    late = HabitStreak(frequency, current_streak=5, longest_streak=5, last_completed=days_ago(window + 1))
    assert complete_habit(on_time, NOW).current_streak == 6
    assert complete_habit(late, NOW).current_streak == 1
    assert grace_window(frequency) == window


def test_same_day_completion_counts_again():
    habit = HabitStreak("daily", current_streak=2, longest_streak=2, last_completed=TODAY)
    once = complete_habit(habit, NOW)
    twice = complete_habit(once, NOW)
    assert once.current_streak == 3
    assert twice.current_streak == 4


def test_longest_streak_never_decreases_over_a_sequence():
    habit = HabitStreak("daily")
    gaps = [0, 1, 1, 1, 5, 1, 1, 2, 1, 0, 40, 1]
    moment = NOW
    for gap in gaps:
        moment = moment + timedelta(days=gap)
        before = habit.longest_streak
        habit = complete_habit(habit, moment)
        assert habit.longest_streak >= before
        assert habit.longest_streak >= habit.current_streak
        assert habit.current_streak >= 1
        assert habit.last_completed == moment.date()


def test_input_record_is_not_mutated():
    habit = HabitStreak("daily", current_streak=1, longest_streak=1, last_completed=days_ago(1))
    complete_habit(habit, NOW)
    assert habit.current_streak == 1
    assert habit.last_completed == days_ago(1)


def test_unrecognized_cadence_is_rejected():
    habit = HabitStreak("yearly", current_streak=1, longest_streak=1, last_completed=days_ago(400))
    with pytest.raises(UnrecognizedCadence) as exc_info:
        complete_habit(habit, NOW)
    assert exc_info.value.frequency == "yearly"


def test_enum_member_is_accepted_as_frequency():
    habit = HabitStreak(Cadence.WEEKLY, current_streak=1, longest_streak=1, last_completed=days_ago(7))
    assert complete_habit(habit, NOW).current_streak == 2


def test_day_boundary_uses_reference_timezone():
    # 23:30 UTC on the 17th is already the 18th in Kolkata
    late_evening = datetime(2026, 10, 17, 23, 30, tzinfo=timezone.utc)
    habit = HabitStreak("daily", current_streak=4, longest_streak=4, last_completed=date(2026, 10, 16))

    in_utc = complete_habit(habit, late_evening, "UTC")
    in_kolkata = complete_habit(habit, late_evening, "Asia/Kolkata")

    assert in_utc.last_completed == date(2026, 10, 17)
    assert in_utc.current_streak == 5
    assert in_kolkata.last_completed == date(2026, 10, 18)
    assert in_kolkata.current_streak == 1


def test_naive_now_is_treated_as_utc():
    naive = datetime(2026, 10, 17, 23, 30)
    assert local_date(naive) == date(2026, 10, 17)
    assert local_date(naive, "Asia/Tokyo") == date(2026, 10, 18)


def test_completion_just_after_midnight_counts_calendar_days():
    # Less than 24h elapsed, but two calendar days apart
    just_after_midnight = datetime(2026, 10, 17, 0, 5, tzinfo=timezone.utc)
    habit = HabitStreak("daily", current_streak=3, longest_streak=3, last_completed=date(2026, 10, 15))
    assert complete_habit(habit, just_after_midnight).current_streak == 1


def test_effective_streak():
    assert effective_streak(HabitStreak("daily"), TODAY) == 0
    assert effective_streak(HabitStreak("daily", 3, 3, days_ago(1)), TODAY) == 3
    assert effective_streak(HabitStreak("daily", 3, 3, days_ago(2)), TODAY) == 0
    assert effective_streak(HabitStreak("weekly", 2, 5, days_ago(7)), TODAY) == 2
    assert effective_streak(HabitStreak("monthly", 2, 5, days_ago(31)), TODAY) == 0
