# app/schemas/goal.py
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, Field
from datetime import datetime
import uuid

from app.schemas.base import LedgerRequest, Pagination

class GoalCreate(LedgerRequest):
    product_id: uuid.UUID = Field(..., validation_alias=AliasChoices("product_id", "productId"))
    target_amount: int = Field(..., validation_alias=AliasChoices("target_amount", "targetAmount"))

class ContributionRequest(LedgerRequest):
    amount: int = Field(..., description="Amount in paise to move from the wallet into the goal")
    notes: Optional[str] = Field(None, max_length=500)

class ProductSummary(BaseModel):
    id: uuid.UUID
    name: str
    price: int
    image_url: Optional[str] = None
    category: Optional[str] = None

    class Config:
        from_attributes = True

class GoalRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    product_id: uuid.UUID
    target_amount: int
    current_amount: int
    status: str
    created_at: datetime
    completed_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    product: Optional[ProductSummary] = None

    class Config:
        from_attributes = True

class ContributionRead(BaseModel):
    id: uuid.UUID
    goal_id: uuid.UUID
    amount: int
    contribution_date: datetime
    notes: Optional[str] = None

    class Config:
        from_attributes = True

class ContributionResult(BaseModel):
    goal: GoalRead
    contribution: ContributionRead
    wallet_balance: int
    goal_completed: bool

class GoalCancellation(BaseModel):
    goal: GoalRead
    refunded_amount: int
    wallet_balance: int

class GoalProgress(GoalRead):
    progress_percentage: int
    remaining_amount: int

class GoalDetail(GoalProgress):
    contributions: List[ContributionRead]

class GoalList(BaseModel):
    goals: List[GoalProgress]
    pagination: Pagination
