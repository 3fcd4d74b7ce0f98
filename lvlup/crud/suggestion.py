from typing import Optional
from sqlalchemy.orm import Session
from lvlup.models.suggestion import Suggestion


def create_suggestion(db: Session, user_id: Optional[str], name: str, category: str, suggestion: str) -> Suggestion:
    db_suggestion = Suggestion(user_id=user_id, name=name, category=category, suggestion=suggestion)
    db.add(db_suggestion)
    db.commit()
    db.refresh(db_suggestion)
    return db_suggestion
