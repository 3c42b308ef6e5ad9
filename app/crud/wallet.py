# app/crud/wallet.py
"""
Wallet store.

These helpers only flush; the caller owns the transaction. Every balance
change must happen inside the same unit of work as its ledger entry.
"""
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from typing import Optional
import uuid

from app.models.wallet import Wallet


async def get_wallet(user_id: uuid.UUID, db: AsyncSession, for_update: bool = False) -> Optional[Wallet]:
    query = select(Wallet).where(Wallet.user_id == user_id)
    if for_update:
        query = query.with_for_update()
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def get_or_create_wallet(user_id: uuid.UUID, now: datetime, db: AsyncSession) -> Wallet:
    """Load the user's wallet row locked for update, creating it with balance 0 if absent."""
    wallet = await get_wallet(user_id, db, for_update=True)
    if wallet is None:
        wallet = Wallet(user_id=user_id, balance=0, created_at=now, updated_at=now)
        db.add(wallet)
        await db.flush()
    return wallet


async def credit_wallet(wallet: Wallet, amount: int, now: datetime, db: AsyncSession) -> int:
    if amount < 0:
        raise ValueError("credit amount must not be negative")
    wallet.balance = wallet.balance + amount
    wallet.updated_at = now
    await db.flush()
    return wallet.balance


async def debit_wallet(wallet: Wallet, amount: int, now: datetime, db: AsyncSession) -> int:
    if amount < 0:
        raise ValueError("debit amount must not be negative")
    if wallet.balance < amount:
        raise ValueError("debit would make the wallet balance negative")
    wallet.balance = wallet.balance - amount
    wallet.updated_at = now
    await db.flush()
    return wallet.balance
