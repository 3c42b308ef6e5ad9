# app/api/v1/routes/rewards.py
import logging
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from app.api.deps import get_current_user_id
from app.core.config import settings
from app.core.database import get_async_session
from app.crud.reward import create_reward, get_rewards_for_user
from app.models.reward import RewardType
from app.schemas.base import Pagination
from app.schemas.reward import RewardCreate, RewardList, RewardRead
from app.utils.timeutils import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rewards", tags=["rewards"])

@router.get("", response_model=RewardList)
async def read_rewards(
    reward_type: Optional[RewardType] = Query(None, alias="rewardType"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    offset: int = Query(0, ge=0),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    """Rewards earned by the current user, newest first."""
    limit = min(limit, settings.MAX_PAGE_SIZE)
    rewards = await get_rewards_for_user(
        user_id,
        db,
        reward_type=reward_type.value if reward_type else None,
        limit=limit,
        offset=offset,
    )
    return RewardList(
        rewards=[RewardRead.model_validate(reward) for reward in rewards],
        pagination=Pagination(limit=limit, offset=offset, count=len(rewards)),
    )

@router.post("", response_model=RewardRead, status_code=status.HTTP_201_CREATED)
async def earn_reward(
    reward_in: RewardCreate,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    """
    Record a reward for the current user.

    - **reward_type**: badge, achievement or product
    - **reward_name**: non-empty name, trimmed
    - **reward_description**: optional
    """
    reward = await create_reward(user_id, reward_in, utcnow(), db)
    logger.info(f"🏅 User {user_id} earned {reward.reward_type} '{reward.reward_name}'")
    return reward
