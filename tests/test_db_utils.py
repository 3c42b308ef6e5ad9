import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.core.db_utils import is_connection_error, with_read_retry


def _dropped_connection():
    return OperationalError("SELECT 1", {}, Exception("server closed the connection unexpectedly"))


def test_connection_errors_are_recognised():
    assert is_connection_error(_dropped_connection())
    assert is_connection_error(ConnectionRefusedError())
    assert not is_connection_error(ValueError("bad input"))
    assert not is_connection_error(IntegrityError("INSERT", {}, Exception("duplicate key")))


async def test_read_is_retried_after_dropped_connection():
    calls = []

    @with_read_retry(max_retries=3, retry_delay=0)
    async def flaky_read():
        calls.append(1)
        if len(calls) < 3:
            raise _dropped_connection()
        return "rows"

    assert await flaky_read() == "rows"
    assert len(calls) == 3


async def test_read_gives_up_after_max_retries():
    calls = []

    @with_read_retry(max_retries=2, retry_delay=0)
    async def always_down():
        calls.append(1)
        raise _dropped_connection()

    with pytest.raises(OperationalError):
        await always_down()
    assert len(calls) == 3


async def test_query_errors_are_not_retried():
    calls = []

    @with_read_retry(max_retries=3, retry_delay=0)
    async def broken_query():
        calls.append(1)
        raise ValueError("not a connection problem")

    with pytest.raises(ValueError):
        await broken_query()
    assert len(calls) == 1
