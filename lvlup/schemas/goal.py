from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime


class GoalCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)


class GoalUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    progress: Optional[int] = Field(None, ge=0, le=100)

    @validator('title', 'progress')
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field cannot be null')
        return v


class GoalProgressUpdate(BaseModel):
    progress: int = Field(..., ge=0, le=100, description="Completion percentage")


class GoalResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    progress: int
    is_completed: bool
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
