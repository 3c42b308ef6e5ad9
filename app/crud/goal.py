# app/crud/goal.py
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, update
from typing import List, Optional
import uuid

from app.core.db_utils import with_read_retry
from app.models.goal import Goal, GoalContribution, GoalStatus


async def create_goal(
    user_id: uuid.UUID,
    product_id: uuid.UUID,
    target_amount: int,
    now: datetime,
    db: AsyncSession,
) -> Goal:
    goal = Goal(
        user_id=user_id,
        product_id=product_id,
        target_amount=target_amount,
        current_amount=0,
        status=GoalStatus.ACTIVE.value,
        created_at=now,
        completed_at=None,
    )
    db.add(goal)
    await db.flush()
    return goal


async def get_goal(goal_id: uuid.UUID, db: AsyncSession, for_update: bool = False) -> Optional[Goal]:
    query = select(Goal).where(Goal.id == goal_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def add_to_goal(goal: Goal, amount: int, now: datetime, db: AsyncSession) -> bool:
    """
    Add funds to a goal loaded for update. Returns True when this contribution
    takes the goal to (or past) its target and completes it.
    """
    new_current_amount = goal.current_amount + amount
    completed = new_current_amount >= goal.target_amount
    goal.current_amount = new_current_amount
    goal.status = GoalStatus.COMPLETED.value if completed else GoalStatus.ACTIVE.value
    goal.completed_at = now if completed else None
    await db.flush()
    return completed


async def finish_goal(goal_id: uuid.UUID, new_status: str, now: datetime, db: AsyncSession) -> bool:
    """Move an active goal to completed or cancelled; False if it was no longer active."""
    values = {"status": new_status}
    if new_status == GoalStatus.COMPLETED.value:
        values["completed_at"] = now
    elif new_status == GoalStatus.CANCELLED.value:
        values["cancelled_at"] = now
    else:
        raise ValueError(f"Goals cannot be moved to {new_status!r}")

    result = await db.execute(
        update(Goal)
        .where(Goal.id == goal_id, Goal.status == GoalStatus.ACTIVE.value)
        .values(**values)
    )
    return result.rowcount == 1


async def add_contribution(
    goal_id: uuid.UUID,
    user_id: uuid.UUID,
    amount: int,
    notes: Optional[str],
    now: datetime,
    db: AsyncSession,
) -> GoalContribution:
    contribution = GoalContribution(
        goal_id=goal_id,
        user_id=user_id,
        amount=amount,
        contribution_date=now,
        notes=notes or None,
    )
    db.add(contribution)
    await db.flush()
    return contribution


@with_read_retry()
async def get_goals_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    status: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Goal]:
    query = select(Goal).where(Goal.user_id == user_id)
    if status:
        query = query.where(Goal.status == status)
    query = query.order_by(desc(Goal.created_at)).limit(limit).offset(offset)
    result = await db.execute(query)
    return result.scalars().all()


@with_read_retry()
async def get_contributions_for_goal(goal_id: uuid.UUID, db: AsyncSession) -> List[GoalContribution]:
    result = await db.execute(
        select(GoalContribution)
        .where(GoalContribution.goal_id == goal_id)
        .order_by(desc(GoalContribution.contribution_date))
    )
    return result.scalars().all()
