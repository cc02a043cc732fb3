# src/marketchat/models/marketplace.py
"""Read-only views of tables owned by the marketplace's user and listing services.

The messaging core never writes to these tables; it only resolves display
names and listing ownership through them.
"""

from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from marketchat.db.session import Base

from .message import USER_ID_LENGTH


class User(Base):
    """Registered marketplace user."""

    __tablename__ = "app_user"

    id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)


class Book(Base):
    """Book listing offered by its owner."""

    __tablename__ = "book"

    id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), primary_key=True)
    owner_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False, index=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    selling_price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    is_sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


# Owned and migrated by the marketplace itself; messaging migrations skip them.
COLLABORATOR_TABLES = frozenset({User.__tablename__, Book.__tablename__})
