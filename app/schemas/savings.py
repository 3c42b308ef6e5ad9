# app/schemas/savings.py
from typing import List
from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
import uuid

from app.schemas.base import LedgerRequest, Pagination

class LockRequest(LedgerRequest):
    amount: int = Field(..., description="Amount in paise to lock away")
    lock_days: int = Field(
        ...,
        validation_alias=AliasChoices("lock_days", "lockDays"),
        description="Length of the lock in days (1-365)",
    )

class WithdrawRequest(LedgerRequest):
    savings_id: uuid.UUID = Field(..., validation_alias=AliasChoices("savings_id", "savingsId"))

class LockedSavingRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    amount: int
    lock_days: int
    locked_at: datetime
    unlock_at: datetime
    status: str
    created_at: datetime

    class Config:
        from_attributes = True

class WithdrawalSummary(BaseModel):
    savings_id: uuid.UUID
    original_amount: int
    withdrawn_amount: int
    penalty: int
    is_early_withdrawal: bool
    status: str
    wallet_balance: int
    message: str

class ActiveSaving(LockedSavingRead):
    is_unlocked: bool
    days_remaining: int

class SavingHistoryItem(LockedSavingRead):
    is_unlocked: bool
    days_locked: int
    final_amount: int

class SavingsSummary(BaseModel):
    total_savings: int
    total_withdrawn: int
    total_penalties: int

class SavingsHistory(BaseModel):
    savings: List[SavingHistoryItem]
    summary: SavingsSummary
    pagination: Pagination
