# app/models/reward.py
import enum
import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Uuid
from app.core.database import Base


class RewardType(str, enum.Enum):
    BADGE = "badge"
    ACHIEVEMENT = "achievement"
    PRODUCT = "product"


class Reward(Base):
    __tablename__ = "rewards"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reward_type = Column(String(length=32), nullable=False, index=True)
    reward_name = Column(String(length=255), nullable=False)
    reward_description = Column(String(length=1000), nullable=True)
    earned_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<Reward {self.reward_type}:{self.reward_name} user_id={self.user_id}>"
