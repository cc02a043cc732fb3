"""Read-only collaborators: the User Directory and the Book Catalog.

Both are owned by other parts of the marketplace. The messaging core only
looks things up through the protocols below and never writes through them.
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.db.guard import store_call
from marketchat.models.marketplace import Book, User

__all__ = [
    "BookCatalog",
    "BookListing",
    "SqlBookCatalog",
    "SqlUserDirectory",
    "UserDirectory",
]


@dataclass(frozen=True)
class BookListing:
    """Listing details the Send Pipeline needs: who owns it, what it is."""

    book_id: str
    owner_id: str
    name: str
    price: Decimal


class UserDirectory(Protocol):
    async def exists(self, user_id: str) -> bool: ...

    async def display_name(self, user_id: str) -> str | None: ...

    async def display_names(self, user_ids: Iterable[str]) -> dict[str, str]: ...


class BookCatalog(Protocol):
    async def get_listing(self, book_id: str) -> BookListing | None: ...


class SqlUserDirectory:
    """User Directory backed by the marketplace ``app_user`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_call
    async def exists(self, user_id: str) -> bool:
        found = await self.session.scalar(select(User.id).where(User.id == user_id))
        return found is not None

    @store_call
    async def display_name(self, user_id: str) -> str | None:
        return await self.session.scalar(select(User.name).where(User.id == user_id))

    @store_call
    async def display_names(self, user_ids: Iterable[str]) -> dict[str, str]:
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.session.execute(select(User.id, User.name).where(User.id.in_(ids)))
        return {user_id: name for user_id, name in result.all()}


class SqlBookCatalog:
    """Book Catalog backed by the marketplace ``book`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_call
    async def get_listing(self, book_id: str) -> BookListing | None:
        book = await self.session.get(Book, book_id)
        if book is None:
            return None
        return BookListing(
            book_id=book.id,
            owner_id=book.owner_id,
            name=book.name,
            price=Decimal(book.selling_price),
        )
