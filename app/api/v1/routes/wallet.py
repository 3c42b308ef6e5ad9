# app/api/v1/routes/wallet.py
from fastapi import APIRouter, Depends, status
import uuid

from app.api.deps import get_current_user_id, get_ledger_service
from app.api.errors import raise_for_failure
from app.schemas.wallet import DepositRequest, DepositResult, WalletRead
from app.services.ledger import LedgerService

router = APIRouter(prefix="/wallet", tags=["wallet"])

@router.get("/balance", response_model=WalletRead)
async def read_wallet_balance(
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    """Current wallet; an empty one is opened on first access."""
    return raise_for_failure(await ledger.get_wallet(user_id))

@router.post("/deposit", response_model=DepositResult, status_code=status.HTTP_201_CREATED)
async def deposit_to_wallet(
    deposit_in: DepositRequest,
    user_id: uuid.UUID = Depends(get_current_user_id),
    ledger: LedgerService = Depends(get_ledger_service),
):
    result = await ledger.deposit(user_id, deposit_in.amount, deposit_in.description)
    return raise_for_failure(result)
