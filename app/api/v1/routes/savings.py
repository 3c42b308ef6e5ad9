# app/api/v1/routes/savings.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from app.api.deps import get_current_user_id, get_ledger_service
from app.api.errors import raise_for_failure
from app.core.config import settings
from app.core.database import get_async_session
from app.crud.locked_saving import get_active_savings_for_user, get_savings_for_user
from app.crud.transaction import get_withdrawal_penalties
from app.models.locked_saving import SavingStatus
from app.schemas.base import Pagination
from app.schemas.savings import (
    ActiveSaving,
    LockedSavingRead,
    LockRequest,
    SavingsHistory,
    WithdrawalSummary,
    WithdrawRequest,
)
from app.services.ledger import LedgerService
from app.utils.savings import describe_active, summarize_history
from app.utils.timeutils import utcnow

router = APIRouter(prefix="/savings", tags=["savings"])

@router.post("/lock", response_model=LockedSavingRead, status_code=status.HTTP_201_CREATED)
async def lock_savings(
    lock_in: LockRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """
    Lock an amount (paise) from the wallet for a number of days.

    - **amount**: positive integer, debited from the wallet
    - **lock_days**: integer between 1 and 365
    """
    result = await ledger.lock(user_id, lock_in.amount, lock_in.lock_days)
    return raise_for_failure(result)

@router.post("/withdraw", response_model=WithdrawalSummary)
async def withdraw_savings(
    withdraw_in: WithdrawRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """
    Withdraw a lock into the wallet. Withdrawing before the unlock date keeps
    back a 10% penalty.
    """
    result = await ledger.withdraw(user_id, withdraw_in.savings_id)
    return raise_for_failure(result)

@router.get("/active", response_model=List[ActiveSaving])
async def read_active_savings(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    savings = await get_active_savings_for_user(user_id, db)
    now = utcnow()
    return [describe_active(saving, now) for saving in savings]

@router.get("/history", response_model=SavingsHistory)
async def read_savings_history(
    status_filter: Optional[SavingStatus] = Query(None, alias="status"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    offset: int = Query(0, ge=0),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    limit = min(limit, settings.MAX_PAGE_SIZE)
    savings = await get_savings_for_user(
        user_id,
        db,
        status=status_filter.value if status_filter else None,
        limit=limit,
        offset=offset,
    )
    penalties = await get_withdrawal_penalties((saving.id for saving in savings), db)
    items, summary = summarize_history(savings, utcnow(), penalties)
    return SavingsHistory(
        savings=items,
        summary=summary,
        pagination=Pagination(limit=limit, offset=offset, count=len(items)),
    )
