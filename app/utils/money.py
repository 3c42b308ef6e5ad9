# app/utils/money.py
"""
Integer money helpers.

Every amount in the system is an integer count of the smallest currency unit
(paise). Anything that needs a fraction goes through Decimal and is rounded
half-up back to a whole unit, so the same input always yields the same paise.
"""
from decimal import Decimal, ROUND_HALF_UP

ONE_UNIT = Decimal("1")
UNITS_PER_RUPEE = 100
CURRENCY_SYMBOL = "₹"


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(ONE_UNIT, rounding=ROUND_HALF_UP))


def compute_penalty(amount: int, percent: int) -> int:
    """
    Penalty for an early withdrawal, rounded half-up to the unit.

    >>> compute_penalty(1000, 10)
    100
    >>> compute_penalty(1005, 10)
    101
    """
    return round_half_up(Decimal(amount) * Decimal(percent) / Decimal(100))


def progress_percentage(current: int, target: int) -> int:
    """Whole-number percentage of target reached (half-up), 0 for a non-positive target."""
    if target <= 0:
        return 0
    return round_half_up(Decimal(current) * Decimal(100) / Decimal(target))


def format_amount(amount: int) -> str:
    """Render paise as a rupee string, e.g. 90050 -> '₹900.50'."""
    sign = "-" if amount < 0 else ""
    rupees = Decimal(abs(amount)) / Decimal(UNITS_PER_RUPEE)
    return f"{sign}{CURRENCY_SYMBOL}{rupees:,.2f}"
