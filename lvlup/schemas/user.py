from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
import re
import pytz

RESERVED_USERNAMES = ['admin', 'root', 'system', 'user', 'test', 'guest', 'me']

class UserBase(BaseModel):
    """Base user schema with common attributes"""
    username: Optional[str] = None
    display_name: Optional[str] = Field(None, max_length=100)
    avatar_url: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = Field(None, max_length=1000)
    timezone: Optional[str] = None

    @validator('username')
    def validate_username(cls, v):
        if v is not None:
            if len(v) < 3:
                raise ValueError('Username must be at least 3 characters long')
            if len(v) > 30:
                raise ValueError('Username must be at most 30 characters long')
            if not re.match(r'^[a-zA-Z0-9_]+$', v):
                raise ValueError('Username can only contain letters, numbers, and underscores')
            if v.lower() in RESERVED_USERNAMES:
                raise ValueError('Username is not allowed')
        return v

    @validator('timezone')
    def validate_timezone(cls, v):
        if v is not None and v not in pytz.all_timezones_set:
            raise ValueError(f'Unknown timezone: {v}')
        return v

class UserUpdate(UserBase):
    """Schema for updating user information"""
    pass

class UserResponse(UserBase):
    """Schema for user response"""
    id: str
    email: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PublicProfile(BaseModel):
    """Profile fields visible to other users"""
    username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class CurrentUser(BaseModel):
    """Simplified user model for authentication responses"""
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    timezone: Optional[str] = None

class UsernameAvailability(BaseModel):
    username: str
    available: bool

class UserAnalytics(BaseModel):
    total_goals: int = 0
    completed_goals: int = 0
    total_habits: int = 0
    active_habits: int = 0
    longest_streak: int = 0
    journal_entries: int = 0
    focus_sessions: int = 0
