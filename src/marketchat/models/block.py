# src/marketchat/models/block.py
"""Models tracking directed block relationships between users."""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from marketchat.db.session import Base
from marketchat.db.time import utcnow

from .message import USER_ID_LENGTH


class UserBlock(Base):
    """One-way block: messages from ``blocked_id`` no longer reach ``blocker_id``.

    Removing a block deletes the row; blocks are not kept as history.
    """

    __tablename__ = "user_block"
    __table_args__ = (
        UniqueConstraint("blocker_id", "blocked_id", name="uq_user_block_pair"),
        Index("ix_user_block_blocked", "blocked_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    blocker_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    blocked_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)
