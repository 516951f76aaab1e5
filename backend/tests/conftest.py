"""Shared test fixtures.

Every test gets its own in-memory SQLite database. The pysqlite driver needs
explicit BEGIN handling for SAVEPOINTs to work, and foreign keys must be
switched on per connection for ON DELETE SET NULL to fire.
"""

from datetime import date
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from expense_tracker.config import settings
from expense_tracker.core.context import UserContext
from expense_tracker.core.database import get_db
from expense_tracker.main import app
from expense_tracker.models import Account, Base, Category, Transaction, User


@pytest.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(test_engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    """A session for direct service calls."""
    async with session_factory() as session:
        yield session


async def _make_user(db: AsyncSession, external_id: str, email: str) -> User:
    user = User(external_id=external_id, email=email, full_name=external_id.title())
    db.add(user)
    await db.flush()
    return user


@pytest.fixture
async def user(db):
    user = await _make_user(db, "alice", "alice@example.com")
    await db.commit()
    return user


@pytest.fixture
async def other_user(db):
    user = await _make_user(db, "bob", "bob@example.com")
    await db.commit()
    return user


@pytest.fixture
def ctx(user):
    return UserContext.create(user)


@pytest.fixture
def other_ctx(other_user):
    return UserContext.create(other_user)


@pytest.fixture
def make_account(db):
    async def _make(
        user: User,
        name: str = "Bank",
        type: str = "bank",
        opening_balance: str = "0.00",
        opening_balance_date: date | None = None,
    ) -> Account:
        account = Account(
            user_id=user.id,
            name=name,
            type=type,
            opening_balance=Decimal(opening_balance),
            opening_balance_date=opening_balance_date,
        )
        db.add(account)
        await db.flush()
        return account

    return _make


@pytest.fixture
def make_category(db):
    async def _make(user: User, name: str, icon: str | None = None, color: str = "#6366f1") -> Category:
        category = Category(user_id=user.id, name=name, icon=icon, color=color)
        db.add(category)
        await db.flush()
        return category

    return _make


@pytest.fixture
def make_transaction(db):
    async def _make(
        account: Account,
        amount: str,
        transaction_type: str = "debit",
        on: date = date(2024, 1, 15),
        category: Category | None = None,
        payment_method: str = "cash",
        is_deleted: bool = False,
    ) -> Transaction:
        txn = Transaction(
            user_id=account.user_id,
            account_id=account.id,
            category_id=category.id if category else None,
            amount=Decimal(amount),
            description="test",
            date=on,
            transaction_type=transaction_type,
            payment_method=payment_method,
            is_deleted=is_deleted,
        )
        db.add(txn)
        await db.flush()
        return txn

    return _make


# ── HTTP ──────────────────────────────────────────


@pytest.fixture
async def client(session_factory):
    """Async test client for the FastAPI app, backed by the test database."""

    async def _get_test_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


def make_token(sub: str, email: str | None = None, name: str | None = None) -> str:
    claims = {"sub": sub}
    if email:
        claims["email"] = email
    if name:
        claims["name"] = name
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


@pytest.fixture
def auth_headers():
    """Bearer headers for a first-time user; the first request provisions it."""
    return {"Authorization": f"Bearer {make_token('carol', 'carol@example.com', 'Carol')}"}


@pytest.fixture
def bearer():
    """Factory for bearer headers of arbitrary token subjects."""

    def _headers(sub: str, email: str | None = None, name: str | None = None) -> dict:
        return {"Authorization": f"Bearer {make_token(sub, email, name)}"}

    return _headers
