# app/services/atomic.py
import logging
from typing import Awaitable, Callable, TypeVar, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.results import LedgerFailure, LedgerResult, internal_error

logger = logging.getLogger(__name__)

T = TypeVar("T")

Work = Callable[[], Awaitable[Union[T, LedgerFailure]]]


async def run_atomic(db: AsyncSession, operation: str, work: Work) -> LedgerResult[T]:
    """
    Run `work` as one all-or-nothing unit on `db`.

    The work function returns either its payload, which is committed, or a
    LedgerFailure, which rolls back every write it made. Any SQLAlchemy error
    also rolls back and comes back as INTERNAL_ERROR. Payloads must be built
    inside `work`; ORM objects are expired by a rollback.
    """
    try:
        outcome = await work()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"❌ {operation} aborted by a storage error; transaction rolled back")
        return LedgerResult.fail(internal_error())
    except Exception:
        await db.rollback()
        raise

    if isinstance(outcome, LedgerFailure):
        await db.rollback()
        logger.warning(f"{operation} rejected: {outcome.code} ({outcome.message})")
        return LedgerResult.fail(outcome)

    try:
        await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        logger.exception(f"❌ {operation} failed to commit; transaction rolled back")
        return LedgerResult.fail(internal_error())

    return LedgerResult.success(outcome)
