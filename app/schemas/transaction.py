# app/schemas/transaction.py
from typing import List, Optional
from pydantic import BaseModel
from datetime import datetime
import uuid

from app.schemas.base import Pagination

class TransactionRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    amount: int
    penalty: Optional[int] = None
    balance_after: int
    reference_id: Optional[uuid.UUID] = None
    reference_type: Optional[str] = None
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class TransactionList(BaseModel):
    transactions: List[TransactionRead]
    pagination: Pagination
