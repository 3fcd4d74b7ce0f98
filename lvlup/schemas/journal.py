from pydantic import BaseModel, Field
from datetime import datetime


class JournalEntryCreate(BaseModel):
    """Schema for a new journal entry."""
    title: str = Field(..., min_length=1, max_length=200, description="Entry title")
    content: str = Field(..., min_length=1, max_length=10000, description="Entry body")


class JournalEntryResponse(BaseModel):
    id: str
    title: str
    content: str
    created_at: datetime

    class Config:
        from_attributes = True
