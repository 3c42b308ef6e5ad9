# app/models/locked_saving.py
import enum
import uuid
from sqlalchemy import Column, String, BigInteger, Integer, DateTime, ForeignKey, CheckConstraint, Uuid
from app.core.database import Base


class SavingStatus(str, enum.Enum):
    ACTIVE = "active"
    WITHDRAWN = "withdrawn"
    EARLY_WITHDRAWAL = "early_withdrawal"


# Terminal states: once a lock leaves ACTIVE it never comes back
WITHDRAWN_STATUSES = (SavingStatus.WITHDRAWN.value, SavingStatus.EARLY_WITHDRAWAL.value)


class LockedSaving(Base):
    __tablename__ = "locked_savings"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_locked_savings_amount_positive"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    lock_days = Column(Integer, nullable=False)
    locked_at = Column(DateTime(timezone=True), nullable=False)
    unlock_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(String(length=32), nullable=False, default=SavingStatus.ACTIVE.value, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=True)

    def __repr__(self):
        return f"<LockedSaving amount={self.amount} status={self.status} unlock_at={self.unlock_at}>"
