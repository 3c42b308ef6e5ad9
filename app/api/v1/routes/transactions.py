# app/api/v1/routes/transactions.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from app.api.deps import get_current_user_id
from app.core.config import settings
from app.core.database import get_async_session
from app.crud.transaction import get_transaction_by_id, get_transactions_for_user
from app.models.transaction import TransactionType
from app.schemas.base import Pagination
from app.schemas.transaction import TransactionList, TransactionRead

router = APIRouter(prefix="/transactions", tags=["transactions"])

@router.get("", response_model=TransactionList)
async def read_transactions(
    tx_type: Optional[TransactionType] = Query(None, alias="type"),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    offset: int = Query(0, ge=0),
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    """Ledger entries for the current user, newest first."""
    limit = min(limit, settings.MAX_PAGE_SIZE)
    entries = await get_transactions_for_user(
        user_id,
        db,
        tx_type=tx_type.value if tx_type else None,
        limit=limit,
        offset=offset,
    )
    return TransactionList(
        transactions=[TransactionRead.model_validate(entry) for entry in entries],
        pagination=Pagination(limit=limit, offset=offset, count=len(entries)),
    )

@router.get("/{transaction_id}", response_model=TransactionRead)
async def read_transaction(
    transaction_id: uuid.UUID,
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_async_session),
):
    tx = await get_transaction_by_id(transaction_id, user_id, db)
    if not tx:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "Transaction not found", "code": "NOT_FOUND"},
        )
    return tx
