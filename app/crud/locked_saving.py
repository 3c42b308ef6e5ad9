# app/crud/locked_saving.py
from datetime import datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, update
from typing import List, Optional
import uuid

from app.core.db_utils import with_read_retry
from app.models.locked_saving import LockedSaving, SavingStatus


async def create_locked_saving(
    user_id: uuid.UUID,
    amount: int,
    lock_days: int,
    now: datetime,
    db: AsyncSession,
) -> LockedSaving:
    saving = LockedSaving(
        user_id=user_id,
        amount=amount,
        lock_days=lock_days,
        locked_at=now,
        unlock_at=now + timedelta(days=lock_days),
        status=SavingStatus.ACTIVE.value,
        created_at=now,
    )
    db.add(saving)
    await db.flush()
    return saving


async def get_locked_saving(saving_id: uuid.UUID, db: AsyncSession, for_update: bool = False) -> Optional[LockedSaving]:
    # No owner filter: the caller tells "missing" apart from "someone else's"
    query = select(LockedSaving).where(LockedSaving.id == saving_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def close_saving(saving_id: uuid.UUID, new_status: str, now: datetime, db: AsyncSession) -> bool:
    """
    Move an active lock to a withdrawn status.

    The update only matches while the row is still active, so of two racing
    withdrawals exactly one sees rowcount == 1.
    """
    result = await db.execute(
        update(LockedSaving)
        .where(
            LockedSaving.id == saving_id,
            LockedSaving.status == SavingStatus.ACTIVE.value,
        )
        .values(status=new_status, updated_at=now)
    )
    return result.rowcount == 1


@with_read_retry()
async def get_active_savings_for_user(user_id: uuid.UUID, db: AsyncSession) -> List[LockedSaving]:
    result = await db.execute(
        select(LockedSaving)
        .where(
            LockedSaving.user_id == user_id,
            LockedSaving.status == SavingStatus.ACTIVE.value,
        )
        .order_by(desc(LockedSaving.created_at))
    )
    return result.scalars().all()


@with_read_retry()
async def get_savings_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    status: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[LockedSaving]:
    query = select(LockedSaving).where(LockedSaving.user_id == user_id)
    if status:
        query = query.where(LockedSaving.status == status)
    query = query.order_by(desc(LockedSaving.created_at)).limit(limit).offset(offset)
    result = await db.execute(query)
    return result.scalars().all()
