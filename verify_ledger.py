#!/usr/bin/env python3
"""
Check that every user's ledger adds up to their wallet balance.
Usage: python verify_ledger.py

Exits with status 1 when any user is out of balance.
"""
import asyncio
import platform
import sys

from app.core.database import AsyncSessionLocal, engine
from app.crud.transaction import find_balance_mismatches
from app.utils.money import format_amount

async def verify_ledger() -> int:
    """Print every mismatch and return how many were found"""
    try:
        async with AsyncSessionLocal() as session:
            print("🔗 Connected, comparing ledger sums with wallet balances...")
            mismatches = await find_balance_mismatches(session)
    finally:
        await engine.dispose()

    if not mismatches:
        print("✅ Every wallet balance matches its ledger")
        return 0

    print(f"\n❌ {len(mismatches)} wallet(s) out of balance:")
    for user_id, balance, ledger_sum in mismatches:
        print(
            f"   👤 {user_id}: wallet {format_amount(balance)}, "
            f"ledger {format_amount(ledger_sum)}, "
            f"difference {format_amount(balance - ledger_sum)}"
        )
    return len(mismatches)

def main():
    """Main function with proper asyncio handling"""
    if platform.system() == 'Windows':
        asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

    try:
        mismatches = asyncio.run(verify_ledger())
    except Exception as e:
        print(f"❌ Ledger verification failed: {e}")
        sys.exit(1)
    sys.exit(1 if mismatches else 0)

if __name__ == "__main__":
    main()
