from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from lvlup.database import Base
import uuid


class Achievement(Base):
    """An achievement awarded to a user. Catalog entries live in lvlup.services.achievements."""
    __tablename__ = "achievements"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    code = Column(String(50), nullable=False)
    earned_at = Column(DateTime, server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="achievements")

    __table_args__ = (
        UniqueConstraint("user_id", "code", name="uq_achievements_user_code"),
    )

    def __repr__(self) -> str:
        return f"<Achievement user_id={self.user_id} code={self.code}>"
