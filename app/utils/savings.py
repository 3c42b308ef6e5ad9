# app/utils/savings.py
from datetime import datetime
from typing import Dict, List, Mapping, Sequence, Tuple
import uuid

from app.models.locked_saving import LockedSaving, SavingStatus, WITHDRAWN_STATUSES
from app.schemas.savings import ActiveSaving, LockedSavingRead, SavingHistoryItem, SavingsSummary
from app.utils.timeutils import days_elapsed, days_remaining, ensure_utc


def is_unlocked(saving: LockedSaving, now: datetime) -> bool:
    return ensure_utc(now) >= ensure_utc(saving.unlock_at)


def final_amount(saving: LockedSaving, penalties: Mapping[uuid.UUID, int]) -> int:
    """What the holder got (or will get at maturity) for this lock, using the penalty the ledger recorded."""
    if saving.status in WITHDRAWN_STATUSES:
        return saving.amount - penalties.get(saving.id, 0)
    return saving.amount


def describe_active(saving: LockedSaving, now: datetime) -> ActiveSaving:
    unlocked = is_unlocked(saving, now)
    return ActiveSaving(
        **LockedSavingRead.model_validate(saving).model_dump(),
        is_unlocked=unlocked,
        days_remaining=0 if unlocked else days_remaining(saving.unlock_at, now),
    )


def summarize_history(
    savings: Sequence[LockedSaving],
    now: datetime,
    penalties: Dict[uuid.UUID, int],
) -> Tuple[List[SavingHistoryItem], SavingsSummary]:
    # ────────────────────────────────────────────────────────────────────
    # totals are over the page that was fetched, like the list itself
    # ────────────────────────────────────────────────────────────────────
    total_savings = 0
    total_withdrawn = 0
    total_penalties = 0
    items: List[SavingHistoryItem] = []

    for saving in savings:
        paid_out = final_amount(saving, penalties)
        if saving.status == SavingStatus.ACTIVE.value:
            total_savings += saving.amount
        elif saving.status in WITHDRAWN_STATUSES:
            total_withdrawn += paid_out
            total_penalties += saving.amount - paid_out

        items.append(SavingHistoryItem(
            **LockedSavingRead.model_validate(saving).model_dump(),
            is_unlocked=is_unlocked(saving, now),
            days_locked=days_elapsed(saving.locked_at, now),
            final_amount=paid_out,
        ))

    summary = SavingsSummary(
        total_savings=total_savings,
        total_withdrawn=total_withdrawn,
        total_penalties=total_penalties,
    )
    return items, summary
