# app/utils/timeutils.py
import math
from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]

SECONDS_PER_DAY = 24 * 60 * 60


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    # SQLite hands timestamps back without tzinfo; they were written as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_remaining(unlock_at: datetime, now: datetime) -> int:
    """Whole days left until unlock_at, rounded up; 0 once it has passed."""
    seconds = (ensure_utc(unlock_at) - ensure_utc(now)).total_seconds()
    if seconds <= 0:
        return 0
    return math.ceil(seconds / SECONDS_PER_DAY)


def days_elapsed(since: datetime, now: datetime) -> int:
    seconds = (ensure_utc(now) - ensure_utc(since)).total_seconds()
    return max(0, math.floor(seconds / SECONDS_PER_DAY))
