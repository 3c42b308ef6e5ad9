from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.utils.money import compute_penalty, format_amount, progress_percentage, round_half_up
from app.utils.timeutils import days_elapsed, days_remaining, ensure_utc


@pytest.mark.parametrize(
    "amount,expected",
    [
        (1000, 100),
        (1005, 101),  # 100.5 rounds up
        (1004, 100),
        (5, 1),       # 0.5 rounds up
        (4, 0),
    ],
)
def test_penalty_is_ten_percent_rounded_half_up(amount, expected):
    assert compute_penalty(amount, 10) == expected


def test_round_half_up_does_not_use_bankers_rounding():
    assert round_half_up(Decimal("2.5")) == 3
    assert round_half_up(Decimal("3.5")) == 4
    assert round_half_up(Decimal("2.49")) == 2


def test_progress_percentage():
    assert progress_percentage(0, 500) == 0
    assert progress_percentage(250, 500) == 50
    assert progress_percentage(1, 3) == 33
    assert progress_percentage(2, 3) == 67
    assert progress_percentage(600, 500) == 120
    assert progress_percentage(10, 0) == 0


def test_format_amount():
    assert format_amount(90050) == "₹900.50"
    assert format_amount(1_234_500) == "₹12,345.00"
    assert format_amount(-100) == "-₹1.00"


def test_naive_timestamps_are_read_as_utc():
    naive = datetime(2025, 1, 1, 12, 0)
    assert ensure_utc(naive) == datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def test_days_remaining_rounds_up_and_stops_at_zero():
    now = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert days_remaining(now + timedelta(days=30), now) == 30
    assert days_remaining(now + timedelta(days=2, hours=1), now) == 3
    assert days_remaining(now - timedelta(days=1), now) == 0


def test_days_elapsed_rounds_down():
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert days_elapsed(start, start + timedelta(days=1, hours=23)) == 1
    assert days_elapsed(start, start) == 0
