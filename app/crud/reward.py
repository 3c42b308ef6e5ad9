# app/crud/reward.py
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc
from typing import List, Optional
import uuid

from app.core.db_utils import with_read_retry
from app.models.reward import Reward
from app.schemas.reward import RewardCreate


async def create_reward(user_id: uuid.UUID, reward_in: RewardCreate, now: datetime, db: AsyncSession) -> Reward:
    """Record a reward earned by the user. No money moves, so this commits on its own."""
    reward = Reward(
        user_id=user_id,
        reward_type=reward_in.reward_type.value,
        reward_name=reward_in.reward_name,
        reward_description=reward_in.reward_description,
        earned_at=now,
    )
    db.add(reward)
    await db.commit()
    await db.refresh(reward)
    return reward


@with_read_retry()
async def get_rewards_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    reward_type: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Reward]:
    query = select(Reward).where(Reward.user_id == user_id)
    if reward_type:
        query = query.where(Reward.reward_type == reward_type)
    query = query.order_by(desc(Reward.earned_at), desc(Reward.id)).limit(limit).offset(offset)
    result = await db.execute(query)
    return result.scalars().all()
