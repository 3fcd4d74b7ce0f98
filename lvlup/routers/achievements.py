from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from lvlup.database import get_db
from lvlup.auth import get_current_user
from lvlup.schemas import CurrentUser, AchievementResponse
from lvlup.services.achievements import CATALOG, get_earned_achievements

router = APIRouter(prefix="/achievements", tags=["achievements"])


@router.get("/", response_model=List[AchievementResponse])
async def list_achievements(
    current_user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Every achievement in the catalog, flagged with whether the user earned it."""
    earned = get_earned_achievements(db, current_user.id)
    return [
        AchievementResponse(
            code=a.code,
            title=a.title,
            description=a.description,
            icon=a.icon,
            earned=a.code in earned,
            earned_at=earned[a.code].earned_at if a.code in earned else None,
        )
        for a in CATALOG
    ]
