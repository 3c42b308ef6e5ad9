# app/schemas/wallet.py
from typing import Optional
from pydantic import BaseModel, Field
from datetime import datetime
import uuid

from app.schemas.base import LedgerRequest
from app.schemas.transaction import TransactionRead

class DepositRequest(LedgerRequest):
    amount: int = Field(..., description="Amount in paise, must be greater than 0")
    description: Optional[str] = Field(None, max_length=255)

class WalletRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    balance: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True

class DepositResult(BaseModel):
    balance: int
    transaction: TransactionRead
