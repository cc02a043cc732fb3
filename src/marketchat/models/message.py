# src/marketchat/models/message.py
"""Models describing direct messages between a buyer and a listing owner."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Index,
    Integer,
    String,
    Text,
    false,
)
from sqlalchemy.orm import Mapped, mapped_column

from marketchat.db.session import Base
from marketchat.db.time import utcnow

USER_ID_LENGTH = 64


class Message(Base):
    """Text message exchanged between exactly two users.

    Rows are never deleted here. Each participant can hide the row for
    themselves through their own flag; the other participant's view is
    untouched.
    """

    __tablename__ = "chat_message"
    __table_args__ = (
        CheckConstraint("sender_id <> receiver_id", name="ck_chat_message_not_self"),
        Index("ix_chat_message_pair_sent", "pair_low", "pair_high", "sent_at", "id"),
        Index("ix_chat_message_receiver_unread", "receiver_id", "read_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    sender_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    receiver_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    # Unordered pair key: min/max of the two participants.
    pair_low: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    pair_high: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)

    # Listing that prompted the message; kept as context only.
    book_id: Mapped[str | None] = mapped_column(String(USER_ID_LENGTH), nullable=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)

    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    hidden_for_sender: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    hidden_for_sender_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    hidden_for_receiver: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    hidden_for_receiver_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    def counterpart_of(self, viewer_id: str) -> str:
        """Return the other participant relative to ``viewer_id``."""
        return self.receiver_id if self.sender_id == viewer_id else self.sender_id

    def is_hidden_for(self, viewer_id: str) -> bool:
        """Return True if ``viewer_id`` has hidden this message."""
        if self.sender_id == viewer_id:
            return self.hidden_for_sender
        if self.receiver_id == viewer_id:
            return self.hidden_for_receiver
        return False

    def involves(self, user_id: str) -> bool:
        """Return True if ``user_id`` is the sender or the receiver."""
        return user_id in (self.sender_id, self.receiver_id)
