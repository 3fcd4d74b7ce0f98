from sqlalchemy import Column, String, DateTime, Integer, Boolean, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from lvlup.database import Base
import uuid


class TimerSettings(Base):
    """Per-user focus timer preferences. Durations are in minutes."""
    __tablename__ = "user_timer_settings"

    # One row per user
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    pomo_duration = Column(Integer, nullable=False, default=25)
    deep_work_duration = Column(Integer, nullable=False, default=60)
    short_break_duration = Column(Integer, nullable=False, default=5)
    long_break_duration = Column(Integer, nullable=False, default=15)
    auto_break = Column(Boolean, nullable=False, default=False)
    notification_sound = Column(String, nullable=False, default="notification.mp3")
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<TimerSettings user_id={self.user_id} pomo={self.pomo_duration} deep={self.deep_work_duration}>"


class FocusSession(Base):
    """A finished focus session (pomodoro or deep work)."""
    __tablename__ = "focus_sessions"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    timer_type = Column(String(20), nullable=False)  # pomodoro, deep_work
    duration_minutes = Column(Integer, nullable=False)
    completed_at = Column(DateTime, nullable=False, index=True)  # UTC

    user = relationship("User", back_populates="focus_sessions")

    def __repr__(self) -> str:
        return f"<FocusSession id={self.id} type={self.timer_type} minutes={self.duration_minutes}>"
