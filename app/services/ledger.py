"""
Ledger Service

Every operation that moves money or changes the lifecycle state of a lock or
goal lives here. Each one runs as a single unit of work through run_atomic:
the wallet, the lock/goal row and the ledger entry change together or not at
all. Rows that are about to be mutated are read FOR UPDATE inside that unit,
so the checks below are made against the state that will actually be
written over.
"""

from typing import Optional, Union
from uuid import UUID
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import goal as goal_store
from app.crud import locked_saving as saving_store
from app.crud import transaction as ledger_store
from app.crud import wallet as wallet_store
from app.models.goal import GoalStatus
from app.models.locked_saving import SavingStatus, WITHDRAWN_STATUSES
from app.models.transaction import ReferenceType, TransactionType
from app.schemas.goal import (
    ContributionRead,
    ContributionResult,
    GoalCancellation,
    GoalRead,
    ProductSummary,
)
from app.schemas.savings import LockedSavingRead, WithdrawalSummary
from app.schemas.transaction import TransactionRead
from app.schemas.wallet import DepositResult, WalletRead
from app.services.atomic import run_atomic
from app.services.catalog import ProductCatalog
from app.services.results import (
    ErrorCode,
    LedgerFailure,
    LedgerResult,
    conflict,
    forbidden,
    insufficient_balance,
    not_found,
    validation_error,
)
from app.utils.money import compute_penalty, format_amount
from app.utils.timeutils import Clock, ensure_utc, utcnow

logger = logging.getLogger(__name__)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class LedgerService:
    """
    Money-movement operations for one request.

    The session, product catalog and clock are handed in rather than looked up,
    so a request (or a test) decides exactly which storage and time it runs
    against.
    """

    def __init__(
        self,
        db: AsyncSession,
        catalog: Optional[ProductCatalog] = None,
        clock: Clock = utcnow,
        penalty_percent: Optional[int] = None,
    ):
        self.db = db
        self.catalog = catalog or ProductCatalog(db)
        self.clock = clock
        self.penalty_percent = (
            settings.EARLY_WITHDRAWAL_PENALTY_PERCENT if penalty_percent is None else penalty_percent
        )

    # ------------------------------------------------------------------
    # Wallet
    # ------------------------------------------------------------------
    async def get_wallet(self, user_id: UUID) -> LedgerResult[WalletRead]:
        """Return the user's wallet, creating an empty one on first access."""
        async def work():
            wallet = await wallet_store.get_or_create_wallet(user_id, self.clock(), self.db)
            return WalletRead.model_validate(wallet)

        return await run_atomic(self.db, "get_wallet", work)

    async def deposit(
        self,
        user_id: UUID,
        amount: int,
        description: Optional[str] = None,
    ) -> LedgerResult[DepositResult]:
        if not _is_positive_int(amount):
            return LedgerResult.fail(validation_error(
                ErrorCode.INVALID_AMOUNT, "Amount must be a positive number greater than 0"
            ))

        async def work():
            now = self.clock()
            wallet = await wallet_store.get_or_create_wallet(user_id, now, self.db)
            balance = await wallet_store.credit_wallet(wallet, amount, now, self.db)
            entry = await ledger_store.record_entry(
                self.db,
                user_id=user_id,
                tx_type=TransactionType.DEPOSIT.value,
                amount=amount,
                balance_after=balance,
                now=now,
                description=description or None,
            )
            logger.info(f"✅ Deposit of {format_amount(amount)} for user {user_id}; balance {format_amount(balance)}")
            return DepositResult(balance=balance, transaction=TransactionRead.model_validate(entry))

        return await run_atomic(self.db, "deposit", work)

    # ------------------------------------------------------------------
    # Locked savings
    # ------------------------------------------------------------------
    async def lock(self, user_id: UUID, amount: int, lock_days: int) -> LedgerResult[LockedSavingRead]:
        """Move `amount` from the wallet into a new lock for `lock_days` days."""
        if not _is_positive_int(amount):
            return LedgerResult.fail(validation_error(
                ErrorCode.INVALID_AMOUNT, "Amount must be a positive number"
            ))
        if (
            not isinstance(lock_days, int)
            or isinstance(lock_days, bool)
            or not settings.MIN_LOCK_DAYS <= lock_days <= settings.MAX_LOCK_DAYS
        ):
            return LedgerResult.fail(validation_error(
                ErrorCode.INVALID_LOCK_DAYS,
                f"Lock days must be an integer between {settings.MIN_LOCK_DAYS} and {settings.MAX_LOCK_DAYS}",
            ))

        async def work() -> Union[LockedSavingRead, LedgerFailure]:
            now = self.clock()
            wallet = await wallet_store.get_or_create_wallet(user_id, now, self.db)
            if wallet.balance < amount:
                return insufficient_balance(available=wallet.balance, required=amount)

            balance = await wallet_store.debit_wallet(wallet, amount, now, self.db)
            saving = await saving_store.create_locked_saving(user_id, amount, lock_days, now, self.db)
            await ledger_store.record_entry(
                self.db,
                user_id=user_id,
                tx_type=TransactionType.LOCK.value,
                amount=-amount,
                balance_after=balance,
                now=now,
                reference_id=saving.id,
                reference_type=ReferenceType.LOCKED_SAVING.value,
                description=f"Locked {format_amount(amount)} for {lock_days} days",
            )
            logger.info(f"🔒 User {user_id} locked {format_amount(amount)} for {lock_days} days (saving {saving.id})")
            return LockedSavingRead.model_validate(saving)

        return await run_atomic(self.db, "lock", work)

    async def withdraw(self, user_id: UUID, savings_id: UUID) -> LedgerResult[WithdrawalSummary]:
        """
        Close an active lock and credit the wallet.

        Before unlock_at the configured penalty (10% by default, rounded
        half-up to the unit) is kept back and the lock ends as
        early_withdrawal; from unlock_at onwards the full amount is paid out
        and the lock ends as withdrawn.
        """
        async def work() -> Union[WithdrawalSummary, LedgerFailure]:
            now = self.clock()
            saving = await saving_store.get_locked_saving(savings_id, self.db, for_update=True)
            if saving is None:
                return not_found(ErrorCode.NOT_FOUND, "Savings record not found")
            if saving.user_id != user_id:
                return forbidden("Not authorized to withdraw this savings record")
            if saving.status in WITHDRAWN_STATUSES:
                return conflict(ErrorCode.ALREADY_WITHDRAWN, "This savings has already been withdrawn")
            if saving.status != SavingStatus.ACTIVE.value:
                return conflict(ErrorCode.INVALID_STATUS, "Savings record is not active")

            original_amount = saving.amount
            is_early = ensure_utc(now) < ensure_utc(saving.unlock_at)
            if is_early:
                penalty = compute_penalty(original_amount, self.penalty_percent)
                new_status = SavingStatus.EARLY_WITHDRAWAL.value
                tx_type = TransactionType.EARLY_WITHDRAWAL.value
            else:
                penalty = 0
                new_status = SavingStatus.WITHDRAWN.value
                tx_type = TransactionType.WITHDRAWAL.value
            final_amount = original_amount - penalty

            if not await saving_store.close_saving(savings_id, new_status, now, self.db):
                return conflict(ErrorCode.ALREADY_WITHDRAWN, "This savings has already been withdrawn")

            wallet = await wallet_store.get_or_create_wallet(user_id, now, self.db)
            balance = await wallet_store.credit_wallet(wallet, final_amount, now, self.db)
            await ledger_store.record_entry(
                self.db,
                user_id=user_id,
                tx_type=tx_type,
                amount=final_amount,
                penalty=penalty,
                balance_after=balance,
                now=now,
                reference_id=savings_id,
                reference_type=ReferenceType.LOCKED_SAVING.value,
                description=(
                    f"Early withdrawal of {format_amount(original_amount)} "
                    f"with {format_amount(penalty)} penalty"
                    if is_early
                    else f"Withdrawal of {format_amount(original_amount)}"
                ),
            )

            if is_early:
                message = (
                    f"Early withdrawal processed with {self.penalty_percent}% penalty. "
                    f"You received {format_amount(final_amount)} from your original {format_amount(original_amount)}."
                )
            else:
                message = f"Withdrawal processed successfully. You received the full amount of {format_amount(final_amount)}."

            logger.info(
                f"🔓 User {user_id} withdrew saving {savings_id}: "
                f"paid {format_amount(final_amount)}, penalty {format_amount(penalty)}"
            )
            return WithdrawalSummary(
                savings_id=savings_id,
                original_amount=original_amount,
                withdrawn_amount=final_amount,
                penalty=penalty,
                is_early_withdrawal=is_early,
                status=new_status,
                wallet_balance=balance,
                message=message,
            )

        return await run_atomic(self.db, "withdraw", work)

    # ------------------------------------------------------------------
    # Goals
    # ------------------------------------------------------------------
    async def create_goal(self, user_id: UUID, product_id: UUID, target_amount: int) -> LedgerResult[GoalRead]:
        if not _is_positive_int(target_amount):
            return LedgerResult.fail(validation_error(
                ErrorCode.INVALID_TARGET_AMOUNT, "Target amount must be a positive number greater than 0"
            ))

        async def work() -> Union[GoalRead, LedgerFailure]:
            lookup = await self.catalog.lookup(product_id)
            if not lookup.exists:
                return not_found(ErrorCode.PRODUCT_NOT_FOUND, "Product not found")
            if not lookup.available:
                return conflict(ErrorCode.PRODUCT_NOT_AVAILABLE, "Product is not available")

            goal = await goal_store.create_goal(user_id, product_id, target_amount, self.clock(), self.db)
            logger.info(f"🎯 User {user_id} created goal {goal.id} for product {product_id} (target {format_amount(target_amount)})")
            return self._goal_read(goal, lookup.product)

        return await run_atomic(self.db, "create_goal", work)

    async def contribute(
        self,
        user_id: UUID,
        goal_id: UUID,
        amount: int,
        notes: Optional[str] = None,
    ) -> LedgerResult[ContributionResult]:
        """
        Move `amount` from the wallet into an active goal.

        The goal completes when the new current amount reaches the target;
        an exact hit and an overshoot both complete it and the overshoot
        stays in the goal.
        """
        if not _is_positive_int(amount):
            return LedgerResult.fail(validation_error(
                ErrorCode.INVALID_AMOUNT, "Amount must be a positive number greater than 0"
            ))

        async def work() -> Union[ContributionResult, LedgerFailure]:
            now = self.clock()
            goal = await goal_store.get_goal(goal_id, self.db, for_update=True)
            if goal is None:
                return not_found(ErrorCode.GOAL_NOT_FOUND, "Goal not found")
            if goal.user_id != user_id:
                return forbidden("You do not have permission to contribute to this goal")
            if goal.status != GoalStatus.ACTIVE.value:
                return conflict(ErrorCode.GOAL_NOT_ACTIVE, "Cannot contribute to a goal that is not active")

            wallet = await wallet_store.get_or_create_wallet(user_id, now, self.db)
            if wallet.balance < amount:
                return insufficient_balance(available=wallet.balance, required=amount)

            balance = await wallet_store.debit_wallet(wallet, amount, now, self.db)
            completed = await goal_store.add_to_goal(goal, amount, now, self.db)
            contribution = await goal_store.add_contribution(goal_id, user_id, amount, notes, now, self.db)
            await ledger_store.record_entry(
                self.db,
                user_id=user_id,
                tx_type=TransactionType.GOAL_ALLOCATION.value,
                amount=-amount,
                balance_after=balance,
                now=now,
                reference_id=contribution.id,
                reference_type=ReferenceType.GOAL_CONTRIBUTION.value,
                # Notes live on the contribution row; the ledger line stays short
                description=f"Contribution to goal {goal_id}",
            )

            logger.info(
                f"💰 User {user_id} contributed {format_amount(amount)} to goal {goal_id} "
                f"({format_amount(goal.current_amount)} of {format_amount(goal.target_amount)}"
                f"{', completed' if completed else ''})"
            )
            return ContributionResult(
                goal=self._goal_read(goal),
                contribution=ContributionRead.model_validate(contribution),
                wallet_balance=balance,
                goal_completed=completed,
            )

        return await run_atomic(self.db, "contribute", work)

    async def complete_goal(self, user_id: UUID, goal_id: UUID) -> LedgerResult[GoalRead]:
        """Mark a fully funded goal as completed. Funds already sit in the goal; the wallet is untouched."""
        async def work() -> Union[GoalRead, LedgerFailure]:
            now = self.clock()
            goal = await goal_store.get_goal(goal_id, self.db, for_update=True)
            if goal is None:
                return not_found(ErrorCode.GOAL_NOT_FOUND, "Goal not found")
            if goal.user_id != user_id:
                return forbidden("You do not have permission to complete this goal")
            if goal.status != GoalStatus.ACTIVE.value:
                return conflict(
                    ErrorCode.GOAL_NOT_ACTIVE,
                    f"Cannot complete goal with status '{goal.status}'. Only active goals can be completed.",
                )
            if goal.current_amount < goal.target_amount:
                remaining = goal.target_amount - goal.current_amount
                return conflict(
                    ErrorCode.GOAL_NOT_FULLY_FUNDED,
                    f"Goal is not fully funded. You need {format_amount(remaining)} more.",
                    current_amount=goal.current_amount,
                    target_amount=goal.target_amount,
                    remaining=remaining,
                )

            if not await goal_store.finish_goal(goal_id, GoalStatus.COMPLETED.value, now, self.db):
                return conflict(ErrorCode.GOAL_NOT_ACTIVE, "Goal is no longer active")

            logger.info(f"🏁 User {user_id} completed goal {goal_id}")
            return self._goal_read(goal)

        return await run_atomic(self.db, "complete_goal", work)

    async def cancel_goal(self, user_id: UUID, goal_id: UUID) -> LedgerResult[GoalCancellation]:
        """
        Cancel an active goal and refund everything contributed so far to the
        wallet. current_amount keeps the funded total for the record.
        """
        async def work() -> Union[GoalCancellation, LedgerFailure]:
            now = self.clock()
            goal = await goal_store.get_goal(goal_id, self.db, for_update=True)
            if goal is None:
                return not_found(ErrorCode.GOAL_NOT_FOUND, "Goal not found")
            if goal.user_id != user_id:
                return forbidden("You do not have permission to cancel this goal")
            if goal.status != GoalStatus.ACTIVE.value:
                return conflict(
                    ErrorCode.GOAL_NOT_ACTIVE,
                    f"Cannot cancel goal with status '{goal.status}'. Only active goals can be cancelled.",
                )

            if not await goal_store.finish_goal(goal_id, GoalStatus.CANCELLED.value, now, self.db):
                return conflict(ErrorCode.GOAL_NOT_ACTIVE, "Goal is no longer active")

            refund = goal.current_amount
            wallet = await wallet_store.get_or_create_wallet(user_id, now, self.db)
            balance = wallet.balance
            if refund > 0:
                balance = await wallet_store.credit_wallet(wallet, refund, now, self.db)
                await ledger_store.record_entry(
                    self.db,
                    user_id=user_id,
                    tx_type=TransactionType.GOAL_REFUND.value,
                    amount=refund,
                    balance_after=balance,
                    now=now,
                    reference_id=goal_id,
                    reference_type=ReferenceType.GOAL.value,
                    description=f"Refund from cancelled goal {goal_id}",
                )

            logger.info(f"User {user_id} cancelled goal {goal_id}; refunded {format_amount(refund)}")
            return GoalCancellation(goal=self._goal_read(goal), refunded_amount=refund, wallet_balance=balance)

        return await run_atomic(self.db, "cancel_goal", work)

    @staticmethod
    def _goal_read(goal, product: Optional[ProductSummary] = None) -> GoalRead:
        read = GoalRead.model_validate(goal)
        if product is not None:
            read.product = product
        return read
