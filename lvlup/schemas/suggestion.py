from pydantic import BaseModel, Field
from datetime import datetime


class SuggestionRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: str = Field(..., pattern=r"^(feature|bug|improvement|other)$")
    suggestion: str = Field(..., min_length=5, max_length=2000)


class SuggestionResponse(BaseModel):
    id: str
    forwarded: bool
    created_at: datetime
