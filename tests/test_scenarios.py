from sqlalchemy import func, select

from app.crud.transaction import find_balance_mismatches, get_ledger_sum, get_transactions_for_user
from app.crud.wallet import get_wallet
from app.models.goal import GoalContribution
from app.models.transaction import Transaction
from app.models.wallet import Wallet


async def test_lock_then_withdraw_immediately(ledger, db, clock, user_id):
    await ledger.deposit(user_id, 1000)
    locked = await ledger.lock(user_id, 1000, 30)
    assert (await get_wallet(user_id, db)).balance == 0

    result = await ledger.withdraw(user_id, locked.value.id)

    assert result.value.status == "early_withdrawal"
    assert result.value.penalty == 100
    assert result.value.wallet_balance == 900


async def test_deposit_then_fund_goal_in_one_go(ledger, db, user_id, product_id):
    await ledger.deposit(user_id, 500)
    goal = await ledger.create_goal(user_id, product_id, 500)

    result = await ledger.contribute(user_id, goal.value.id, 500)

    assert result.value.wallet_balance == 0
    assert result.value.goal.status == "completed"
    contributions = await db.execute(
        select(func.count(GoalContribution.id)).where(GoalContribution.goal_id == goal.value.id)
    )
    assert contributions.scalar_one() == 1
    entries = await get_transactions_for_user(user_id, db)
    assert sorted((e.type, e.amount) for e in entries) == [("deposit", 500), ("goal_allocation", -500)]


async def test_ledger_always_sums_to_wallet_balance(ledger, db, clock, user_id, product_id):
    async def assert_balanced():
        wallet = await get_wallet(user_id, db)
        assert await get_ledger_sum(user_id, db) == wallet.balance

    await ledger.deposit(user_id, 10_000)
    await assert_balanced()
    first = await ledger.lock(user_id, 3000, 10)
    second = await ledger.lock(user_id, 1005, 5)
    await assert_balanced()
    goal = await ledger.create_goal(user_id, product_id, 4000)
    await ledger.contribute(user_id, goal.value.id, 2500)
    await assert_balanced()

    clock.advance(days=5)
    await ledger.withdraw(user_id, second.value.id)  # matured
    await ledger.withdraw(user_id, first.value.id)   # early, penalty 300
    await assert_balanced()

    # Rejected operations must not disturb the books either
    await ledger.lock(user_id, 1_000_000, 10)
    await ledger.withdraw(user_id, first.value.id)
    await ledger.contribute(user_id, goal.value.id, 1_000_000)
    await assert_balanced()

    await ledger.cancel_goal(user_id, goal.value.id)
    await assert_balanced()

    wallet = await get_wallet(user_id, db)
    assert wallet.balance == 10_000 - 300
    assert await find_balance_mismatches(db) == []


async def test_mismatch_report_finds_tampered_wallet(ledger, db, user_id, other_user_id):
    await ledger.deposit(user_id, 1000)
    await ledger.deposit(other_user_id, 400)
    wallet = await get_wallet(user_id, db)
    wallet.balance = 1200
    await db.commit()

    mismatches = await find_balance_mismatches(db)

    assert mismatches == [(user_id, 1200, 1000)]


async def test_mismatch_report_finds_ledger_without_wallet(ledger, db, user_id):
    await ledger.deposit(user_id, 250)
    await db.execute(Wallet.__table__.delete().where(Wallet.user_id == user_id))
    await db.commit()

    mismatches = await find_balance_mismatches(db)

    assert mismatches == [(user_id, 0, 250)]
    total = await db.execute(select(func.sum(Transaction.amount)))
    assert total.scalar_one() == 250
