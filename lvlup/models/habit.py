from sqlalchemy import Column, String, Date, DateTime, Integer, ForeignKey, Text, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from lvlup.database import Base
import uuid


class Habit(Base):
    """A recurring habit and its streak counters."""
    __tablename__ = "habits"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    frequency = Column(String(20), nullable=False, default="daily")  # daily, weekly, monthly
    target_count = Column(Integer, nullable=False, default=1)
    category = Column(String(100), nullable=True)

    # Streak counters, always written together
    current_streak = Column(Integer, nullable=False, default=0)
    longest_streak = Column(Integer, nullable=False, default=0)
    last_completed = Column(Date, nullable=True)  # Calendar date in the owner's timezone

    created_at = Column(DateTime, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="habits")

    __table_args__ = (
        CheckConstraint("current_streak >= 0", name="ck_habits_current_streak_non_negative"),
        CheckConstraint("longest_streak >= current_streak", name="ck_habits_longest_ge_current"),
    )

    def __repr__(self) -> str:
        return (
            f"<Habit id={self.id} freq={self.frequency} current={self.current_streak} "
            f"longest={self.longest_streak} last={self.last_completed}>"
        )
