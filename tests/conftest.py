# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import AsyncIterator, Callable, Iterator
from decimal import Decimal
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from marketchat.core.security import create_access_token
from marketchat.db.session import Base
from marketchat.db.session import get_session as app_get_session
from marketchat.main import app as fastapi_app
from marketchat.models import Book, User

ALICE = "user-1"
BOB = "user-2"
CAROL = "user-3"

ALICE_BOOK = "book-alice"
BOB_BOOK = "book-bob"
CAROL_BOOK = "book-carol"


@pytest.fixture()
async def engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'marketchat.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture()
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def marketplace(db_session: AsyncSession) -> dict[str, str]:
    """Seed three users and one listing per user in the collaborator tables."""
    db_session.add_all(
        [
            User(id=ALICE, name="Alice", email="alice@example.com"),
            User(id=BOB, name="Bob", email="bob@example.com"),
            User(id=CAROL, name="Carol", email="carol@example.com"),
            Book(id=ALICE_BOOK, owner_id=ALICE, name="Linear Algebra", selling_price=Decimal("8.00")),
            Book(id=BOB_BOOK, owner_id=BOB, name="Organic Chemistry", selling_price=Decimal("12.50")),
            Book(id=CAROL_BOOK, owner_id=CAROL, name="Data Structures", selling_price=Decimal("20.00")),
        ]
    )
    await db_session.commit()
    return {
        "alice": ALICE,
        "bob": BOB,
        "carol": CAROL,
        "alice_book": ALICE_BOOK,
        "bob_book": BOB_BOOK,
        "carol_book": CAROL_BOOK,
    }


@pytest.fixture()
def app(session_factory: async_sessionmaker[AsyncSession]) -> Iterator[FastAPI]:
    async def _get_session_override() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
            finally:
                if session.in_transaction():
                    await session.rollback()

    fastapi_app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield fastapi_app
    finally:
        fastapi_app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client


def auth_headers(user_id: str) -> dict[str, str]:
    """Return authorization headers for ``user_id``."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture()
def alice_auth(marketplace: dict[str, str]) -> dict[str, str]:
    return auth_headers(ALICE)


@pytest.fixture()
def bob_auth(marketplace: dict[str, str]) -> dict[str, str]:
    return auth_headers(BOB)


@pytest.fixture()
def carol_auth(marketplace: dict[str, str]) -> dict[str, str]:
    return auth_headers(CAROL)


@pytest.fixture()
def make_auth() -> Callable[[str], dict[str, str]]:
    return auth_headers
