import os

# Settings are read at import time; give them something before app modules load
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-jwt-signing-only")
os.environ.setdefault("FRONTEND_URL", "http://localhost:3000")
os.environ.setdefault("ENVIRONMENT", "test")

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.deps import get_current_user_id
from app.core.auth import User
from app.core.database import Base, get_async_session
from app.main import app
from app.models import goal, locked_saving, product, reward, transaction, wallet  # noqa: F401
from app.models.product import Product
from app.services.ledger import LedgerService


class FrozenClock:
    """Clock that only moves when a test tells it to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def clock():
    return FrozenClock(datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def ledger(db, clock):
    return LedgerService(db, clock=clock)


async def create_user(db, email: str):
    user = User(
        email=email,
        hashed_password="not-a-real-hash",
        is_active=True,
        is_superuser=False,
        is_verified=True,
        full_name=email.split("@")[0],
    )
    db.add(user)
    await db.commit()
    return user.id


@pytest.fixture
async def user_id(db):
    return await create_user(db, "asha@example.com")


@pytest.fixture
async def other_user_id(db):
    return await create_user(db, "ravi@example.com")


async def create_product(db, name="Sony WH-1000XM5", price=50_000, available=True):
    item = Product(
        name=name,
        category="Electronics",
        price=price,
        image_url="https://images.example.com/headphones.jpg",
        description="Noise cancelling headphones",
        available=available,
    )
    db.add(item)
    await db.commit()
    return item.id


@pytest.fixture
async def product_id(db):
    return await create_product(db)


async def commit_behind_session(db, model, row_id, **values):
    """
    Commit a change straight to the table. ORM objects already loaded in `db`
    keep their old attribute values, like a row read just before another
    request committed.
    """
    table = model.__table__
    await db.execute(table.update().where(table.c.id == row_id).values(**values))
    await db.commit()


@pytest.fixture
def override_session(session_maker):
    async def _session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_async_session] = _session
    yield
    app.dependency_overrides.clear()


@pytest.fixture
async def client(override_session, user_id):
    app.dependency_overrides[get_current_user_id] = lambda: user_id
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def anon_client(override_session):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
