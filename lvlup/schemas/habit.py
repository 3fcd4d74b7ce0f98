from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import date, datetime

from lvlup.services.habit_tracker import Cadence


class HabitBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=200, description="Habit name")
    description: Optional[str] = Field(None, max_length=2000)
    frequency: Cadence = Field(Cadence.DAILY, description="How often the habit is expected")
    target_count: int = Field(1, ge=1, le=100)
    category: Optional[str] = Field(None, max_length=100)


class HabitCreate(HabitBase):
    pass


class HabitUpdate(BaseModel):
    """Editable fields. Streak counters are changed only by completions."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    frequency: Optional[Cadence] = None
    target_count: Optional[int] = Field(None, ge=1, le=100)
    category: Optional[str] = Field(None, max_length=100)

    @validator('title', 'frequency', 'target_count')
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class HabitResponse(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    frequency: str
    target_count: int
    category: Optional[str] = None
    current_streak: int
    longest_streak: int
    last_completed: Optional[date] = None
    effective_streak: int = Field(0, description="Streak as of today; 0 once the grace window has passed")
    is_on_track: bool = Field(False, description="Whether the streak is still alive today")
    created_at: datetime

    class Config:
        from_attributes = True


class EarnedAchievement(BaseModel):
    code: str
    title: str
    description: str
    icon: str


class HabitCompletionResponse(BaseModel):
    habit: HabitResponse
    previous_streak: int
    streak_reset: bool
    new_achievements: List[EarnedAchievement] = []
