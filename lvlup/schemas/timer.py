from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime


class TimerSettingsBase(BaseModel):
    pomo_duration: int = Field(25, ge=1, le=240, description="Minutes")
    deep_work_duration: int = Field(60, ge=1, le=480, description="Minutes")
    short_break_duration: int = Field(5, ge=1, le=60, description="Minutes")
    long_break_duration: int = Field(15, ge=1, le=120, description="Minutes")
    auto_break: bool = False
    notification_sound: str = Field("notification.mp3", max_length=200)


class TimerSettingsUpdate(BaseModel):
    pomo_duration: Optional[int] = Field(None, ge=1, le=240)
    deep_work_duration: Optional[int] = Field(None, ge=1, le=480)
    short_break_duration: Optional[int] = Field(None, ge=1, le=60)
    long_break_duration: Optional[int] = Field(None, ge=1, le=120)
    auto_break: Optional[bool] = None
    notification_sound: Optional[str] = Field(None, max_length=200)


class TimerSettingsResponse(TimerSettingsBase):
    class Config:
        from_attributes = True


class FocusSessionCreate(BaseModel):
    timer_type: Literal["pomodoro", "deep_work"]
    duration_minutes: int = Field(..., ge=1, le=480)


class FocusSessionResponse(BaseModel):
    id: str
    timer_type: str
    duration_minutes: int
    completed_at: datetime

    class Config:
        from_attributes = True


class FocusStats(BaseModel):
    daily_sessions: int
    weekly_sessions: int
    total_sessions: int
    total_minutes: int
