# app/crud/transaction.py
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import desc, func
from typing import Dict, Iterable, List, Optional, Tuple
import uuid

from app.core.db_utils import with_read_retry
from app.models.transaction import ReferenceType, Transaction, TransactionType
from app.models.wallet import Wallet


async def record_entry(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    tx_type: str,
    amount: int,
    balance_after: int,
    now: datetime,
    penalty: Optional[int] = None,
    reference_id: Optional[uuid.UUID] = None,
    reference_type: Optional[str] = None,
    description: Optional[str] = None,
) -> Transaction:
    """Append one ledger row. Amount is signed: positive credits the wallet, negative debits it."""
    entry = Transaction(
        user_id=user_id,
        type=tx_type,
        amount=amount,
        penalty=penalty,
        balance_after=balance_after,
        reference_id=reference_id,
        reference_type=reference_type,
        description=description,
        created_at=now,
    )
    db.add(entry)
    await db.flush()
    return entry


@with_read_retry()
async def get_transactions_for_user(
    user_id: uuid.UUID,
    db: AsyncSession,
    tx_type: Optional[str] = None,
    limit: int = 50,
    offset: int = 0,
) -> List[Transaction]:
    query = select(Transaction).where(Transaction.user_id == user_id)
    if tx_type:
        query = query.where(Transaction.type == tx_type)
    query = query.order_by(desc(Transaction.created_at), desc(Transaction.id)).limit(limit).offset(offset)
    result = await db.execute(query)
    return result.scalars().all()


@with_read_retry()
async def get_transaction_by_id(transaction_id: uuid.UUID, user_id: uuid.UUID, db: AsyncSession) -> Optional[Transaction]:
    result = await db.execute(
        select(Transaction).where(Transaction.id == transaction_id, Transaction.user_id == user_id)
    )
    return result.scalar_one_or_none()


@with_read_retry()
async def get_withdrawal_penalties(saving_ids: Iterable[uuid.UUID], db: AsyncSession) -> Dict[uuid.UUID, int]:
    """Penalty recorded on the withdrawal entry of each given lock; locks not yet withdrawn are absent."""
    ids = set(saving_ids)
    if not ids:
        return {}
    result = await db.execute(
        select(Transaction.reference_id, Transaction.penalty).where(
            Transaction.reference_type == ReferenceType.LOCKED_SAVING.value,
            Transaction.type.in_((TransactionType.WITHDRAWAL.value, TransactionType.EARLY_WITHDRAWAL.value)),
            Transaction.reference_id.in_(ids),
        )
    )
    return {reference_id: int(penalty or 0) for reference_id, penalty in result.all()}


async def get_ledger_sum(user_id: uuid.UUID, db: AsyncSession) -> int:
    result = await db.execute(
        select(func.coalesce(func.sum(Transaction.amount), 0)).where(Transaction.user_id == user_id)
    )
    return int(result.scalar_one())


async def find_balance_mismatches(db: AsyncSession) -> List[Tuple[uuid.UUID, int, int]]:
    """
    Return (user_id, wallet_balance, ledger_sum) for every user whose ledger
    entries do not add up to the wallet balance. Users with ledger rows but no
    wallet are reported with a wallet balance of 0.
    """
    sums = (
        select(Transaction.user_id.label("user_id"), func.sum(Transaction.amount).label("total"))
        .group_by(Transaction.user_id)
        .subquery()
    )

    wallet_rows = await db.execute(
        select(Wallet.user_id, Wallet.balance, func.coalesce(sums.c.total, 0))
        .outerjoin(sums, sums.c.user_id == Wallet.user_id)
    )
    mismatches = [
        (user_id, int(balance), int(total))
        for user_id, balance, total in wallet_rows.all()
        if int(balance) != int(total)
    ]

    orphan_rows = await db.execute(
        select(sums.c.user_id, sums.c.total)
        .outerjoin(Wallet, Wallet.user_id == sums.c.user_id)
        .where(Wallet.id.is_(None))
    )
    mismatches.extend(
        (user_id, 0, int(total))
        for user_id, total in orphan_rows.all()
        if int(total) != 0
    )
    return mismatches
