from __future__ import annotations
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone as dt_timezone
from enum import Enum
from typing import Optional
import pytz


class Cadence(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


# Maximum days since the last completion that still continue a streak
GRACE_WINDOWS = {
    Cadence.DAILY: 1,
    Cadence.WEEKLY: 7,
    Cadence.MONTHLY: 30,
}


class UnrecognizedCadence(ValueError):
    """Raised when a habit frequency is not one of daily, weekly or monthly."""

    def __init__(self, frequency):
        self.frequency = frequency
        super().__init__(f"Unrecognized habit cadence: {frequency!r}")


@dataclass(frozen=True)
class HabitStreak:
    """The streak-bearing part of a habit record."""
    frequency: str
    current_streak: int = 0
    longest_streak: int = 0
    last_completed: Optional[date] = None

    @classmethod
    def from_habit(cls, habit) -> "HabitStreak":
        return cls(
            frequency=habit.frequency,
            current_streak=habit.current_streak or 0,
            longest_streak=habit.longest_streak or 0,
            last_completed=habit.last_completed,
        )


def parse_cadence(frequency) -> Cadence:
    try:
        return Cadence(frequency)
    except ValueError:
        raise UnrecognizedCadence(frequency) from None


def grace_window(frequency) -> int:
    """Return the grace window in days for a cadence."""
    return GRACE_WINDOWS[parse_cadence(frequency)]


def local_date(now: datetime, tz_name: str = "UTC") -> date:
    """
    Calendar date of `now` in the given timezone.

    Naive datetimes are treated as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt_timezone.utc)
    return now.astimezone(pytz.timezone(tz_name)).date()


def days_since(last_completed: date, today: date) -> int:
    """Whole calendar days between two local dates."""
    return (today - last_completed).days


def complete_habit(habit: HabitStreak, now: datetime, tz_name: str = "UTC") -> HabitStreak:
    """
    Compute the streak state after the habit is completed at `now`.

    Both `now` and the stored `last_completed` are compared as calendar dates
    in `tz_name`. A gap larger than the cadence's grace window restarts the
    streak at 1. Completing twice on the same day counts twice.

    Args:
        habit: Current streak state
        now: Moment of the completion event
        tz_name: IANA timezone used for day boundaries

    Returns:
        New HabitStreak with all three counters updated

    Raises:
        UnrecognizedCadence: If habit.frequency is not a known cadence
    """
    window = grace_window(habit.frequency)
    today = local_date(now, tz_name)

    new_streak = habit.current_streak + 1
    if habit.last_completed is not None and days_since(habit.last_completed, today) > window:
        new_streak = 1

    return replace(
        habit,
        current_streak=new_streak,
        longest_streak=max(new_streak, habit.longest_streak),
        last_completed=today,
    )


def effective_streak(habit: HabitStreak, today: date) -> int:
    """
    Streak as it stands on `today` without a new completion.

    Returns 0 once the grace window since the last completion has passed,
    so a lapsed streak is not shown as still running.
    """
    if habit.last_completed is None:
        return 0
    if days_since(habit.last_completed, today) > grace_window(habit.frequency):
        return 0
    return habit.current_streak
