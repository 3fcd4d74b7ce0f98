from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class AchievementResponse(BaseModel):
    code: str
    title: str
    description: str
    icon: str
    earned: bool
    earned_at: Optional[datetime] = None
