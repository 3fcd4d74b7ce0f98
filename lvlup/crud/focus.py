from __future__ import annotations
from typing import Optional, Tuple
from datetime import datetime, timedelta, timezone as dt_timezone
import pytz
from sqlalchemy import func
from sqlalchemy.orm import Session

from lvlup.models.focus import TimerSettings, FocusSession

DEFAULT_TIMER_SETTINGS = {
    "pomo_duration": 25,
    "deep_work_duration": 60,
    "short_break_duration": 5,
    "long_break_duration": 15,
    "auto_break": False,
    "notification_sound": "notification.mp3",
}


def get_timer_settings(db: Session, user_id: str) -> Optional[TimerSettings]:
    return db.query(TimerSettings).filter(TimerSettings.user_id == user_id).first()


def upsert_timer_settings(db: Session, user_id: str, settings_data: dict) -> TimerSettings:
    """Create the user's timer settings row or update the provided fields."""
    timer_settings = get_timer_settings(db, user_id)
    if timer_settings is None:
        timer_settings = TimerSettings(user_id=user_id, **{**DEFAULT_TIMER_SETTINGS, **settings_data})
        db.add(timer_settings)
    else:
        for field, value in settings_data.items():
            if field in DEFAULT_TIMER_SETTINGS:
                setattr(timer_settings, field, value)
    db.commit()
    db.refresh(timer_settings)
    return timer_settings


def log_focus_session(db: Session, user_id: str, timer_type: str, duration_minutes: int, completed_at: datetime) -> FocusSession:
    """Record a finished focus session. completed_at is stored as naive UTC."""
    if completed_at.tzinfo is not None:
        completed_at = completed_at.astimezone(dt_timezone.utc).replace(tzinfo=None)
    session = FocusSession(
        user_id=user_id,
        timer_type=timer_type,
        duration_minutes=duration_minutes,
        completed_at=completed_at,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    return session


def _period_bounds_utc(now_utc: datetime, tz_name: str) -> Tuple[datetime, datetime]:
    """Start of the local day and of the local ISO week, as naive UTC datetimes."""
    tz = pytz.timezone(tz_name)
    now_local = now_utc.astimezone(tz)
    today_local = now_local.date()
    week_start_local = today_local - timedelta(days=today_local.weekday())

    def _to_utc(d):
        local_midnight = tz.localize(datetime(d.year, d.month, d.day))
        return local_midnight.astimezone(dt_timezone.utc).replace(tzinfo=None)

    return _to_utc(today_local), _to_utc(week_start_local)


def get_session_counts(db: Session, user_id: str, now_utc: datetime, tz_name: str) -> dict:
    """
    Count sessions finished today and this week in the user's timezone.

    Returns:
        Dict with daily_sessions, weekly_sessions, total_sessions and total_minutes
    """
    day_start, week_start = _period_bounds_utc(now_utc, tz_name)
    base = db.query(FocusSession).filter(FocusSession.user_id == user_id)
    total_minutes = db.query(func.coalesce(func.sum(FocusSession.duration_minutes), 0)).filter(
        FocusSession.user_id == user_id
    ).scalar()

    return {
        "daily_sessions": base.filter(FocusSession.completed_at >= day_start).count(),
        "weekly_sessions": base.filter(FocusSession.completed_at >= week_start).count(),
        "total_sessions": base.count(),
        "total_minutes": int(total_minutes or 0),
    }
