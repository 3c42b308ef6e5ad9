# app/schemas/reward.py
from typing import Any, List, Optional
from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError
from datetime import datetime
import uuid

from app.models.reward import RewardType
from app.schemas.base import LedgerRequest, Pagination

class RewardCreate(LedgerRequest):
    reward_type: RewardType = Field(..., validation_alias=AliasChoices("reward_type", "rewardType"))
    reward_name: str = Field(..., validation_alias=AliasChoices("reward_name", "rewardName"))
    reward_description: Optional[str] = Field(
        None,
        max_length=1000,
        validation_alias=AliasChoices("reward_description", "rewardDescription"),
    )

    @field_validator("reward_name", mode="before")
    @classmethod
    def require_reward_name(cls, value: Any) -> Any:
        # null and "" count as not given; whitespace-only is a bad value
        if value is None or value == "":
            raise PydanticCustomError("missing", "rewardName is required")
        return value

    @field_validator("reward_name")
    @classmethod
    def strip_reward_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("rewardName must be a non-empty string")
        if len(value) > 255:
            raise ValueError("rewardName must be at most 255 characters")
        return value

    @field_validator("reward_description")
    @classmethod
    def strip_reward_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

class RewardRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    reward_type: str
    reward_name: str
    reward_description: Optional[str] = None
    earned_at: datetime

    class Config:
        from_attributes = True

class RewardList(BaseModel):
    rewards: List[RewardRead]
    pagination: Pagination
