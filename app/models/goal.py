# app/models/goal.py
import enum
import uuid
from sqlalchemy import Column, String, BigInteger, DateTime, ForeignKey, CheckConstraint, Uuid
from app.core.database import Base


class GoalStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("target_amount > 0", name="ck_goals_target_positive"),
        CheckConstraint("current_amount >= 0", name="ck_goals_current_non_negative"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid(as_uuid=True), ForeignKey("products.id"), nullable=False)
    target_amount = Column(BigInteger, nullable=False)
    # Moved here only by contributions, never decreases while active
    current_amount = Column(BigInteger, nullable=False, default=0)
    status = Column(String(length=32), nullable=False, default=GoalStatus.ACTIVE.value, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<Goal current={self.current_amount}/{self.target_amount} status={self.status} user_id={self.user_id}>"


class GoalContribution(Base):
    __tablename__ = "goal_contributions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_goal_contributions_amount_positive"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    goal_id = Column(Uuid(as_uuid=True), ForeignKey("goals.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    amount = Column(BigInteger, nullable=False)
    contribution_date = Column(DateTime(timezone=True), nullable=False)
    notes = Column(String(length=500), nullable=True)

    def __repr__(self):
        return f"<GoalContribution amount={self.amount} goal_id={self.goal_id}>"
