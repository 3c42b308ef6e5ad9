"""
Database utilities for read-side connection error handling.

Only read queries go through the retry decorator below. Money-movement
operations are never retried here: a retried deposit or withdrawal would
move money twice.
"""
import asyncio
import functools
import logging
from typing import Callable, Any, TypeVar, cast, Awaitable

from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar('T')

CONNECTION_ERROR_NAMES = (
    "ConnectionError",
    "ConnectionDoesNotExistError",
    "ConnectionRefusedError",
)


def is_connection_error(exc: BaseException) -> bool:
    """True for errors that mean the connection dropped, not that the query was wrong."""
    if isinstance(exc, OperationalError):
        return True
    if isinstance(exc, DBAPIError) and exc.connection_invalidated:
        return True
    error_name = type(exc).__name__
    return any(name in error_name for name in CONNECTION_ERROR_NAMES)


def with_read_retry(
    max_retries: int = 3,
    retry_delay: float = 0.5
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Decorator that retries a read-only query on connection errors.

    Args:
        max_retries: Maximum number of retries before giving up
        retry_delay: Base delay between retries in seconds (doubled each attempt)
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 0
            while True:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not is_connection_error(e) or attempt >= max_retries:
                        if attempt:
                            logger.error(f"{func.__name__} failed after {attempt} retries: {e}")
                        raise
                    attempt += 1
                    # The failed statement poisons the session's transaction
                    for arg in list(args) + list(kwargs.values()):
                        if isinstance(arg, AsyncSession):
                            await arg.rollback()
                    delay = retry_delay * (2 ** (attempt - 1))
                    logger.warning(
                        f"Database connection error in {func.__name__}: {str(e)}. "
                        f"Retrying in {delay:.2f}s... (Attempt {attempt}/{max_retries})"
                    )
                    await asyncio.sleep(delay)

        return cast(Callable[..., Awaitable[T]], wrapper)

    return decorator
