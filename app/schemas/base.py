# app/schemas/base.py
from typing import Any
from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError

# Identity always comes from the bearer token, never from the payload
USER_ID_FIELDS = ("userId", "user_id")


class LedgerRequest(BaseModel):
    """Base for every request body; the acting user always comes from the token."""

    @model_validator(mode="before")
    @classmethod
    def reject_user_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and any(field in data for field in USER_ID_FIELDS):
            raise PydanticCustomError(
                "user_id_not_allowed",
                "User ID cannot be provided in request body",
            )
        return data


class Pagination(BaseModel):
    limit: int
    offset: int
    count: int
