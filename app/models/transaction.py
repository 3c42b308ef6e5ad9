# app/models/transaction.py
import enum
import uuid
from sqlalchemy import Column, String, BigInteger, DateTime, ForeignKey, Uuid
from app.core.database import Base


class TransactionType(str, enum.Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    EARLY_WITHDRAWAL = "early_withdrawal"
    LOCK = "lock"
    GOAL_ALLOCATION = "goal_allocation"
    GOAL_REFUND = "goal_refund"
    REWARD_CLAIM = "reward_claim"


class ReferenceType(str, enum.Enum):
    LOCKED_SAVING = "locked_saving"
    GOAL = "goal"
    GOAL_CONTRIBUTION = "goal_contribution"


class Transaction(Base):
    """Append-only ledger row. Rows are inserted, never updated or deleted."""
    __tablename__ = "transactions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(length=32), nullable=False, index=True)
    # Signed relative to the wallet: credits positive, debits negative
    amount = Column(BigInteger, nullable=False)
    penalty = Column(BigInteger, nullable=True)
    balance_after = Column(BigInteger, nullable=False)
    reference_id = Column(Uuid(as_uuid=True), nullable=True)
    reference_type = Column(String(length=32), nullable=True)
    description = Column(String(length=255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    def __repr__(self):
        return f"<Transaction type={self.type} amount={self.amount} user_id={self.user_id}>"
