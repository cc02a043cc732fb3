"""Message Store: append-only storage of messages, queryable by participant pair."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from marketchat.core.errors import NotFoundError, ValidationError
from marketchat.core.settings import settings
from marketchat.db.guard import store_call
from marketchat.db.time import utcnow
from marketchat.models.message import Message

__all__ = ["MessagePage", "MessageRepository", "between", "pair_key", "visible_to"]


def pair_key(user_a: str, user_b: str) -> tuple[str, str]:
    """Return the unordered pair key ``(min, max)`` for two participants."""
    return (user_a, user_b) if user_a <= user_b else (user_b, user_a)


def between(user_a: str, user_b: str) -> ColumnElement[bool]:
    """Filter matching every message exchanged by the two users, either direction."""
    low, high = pair_key(user_a, user_b)
    return and_(Message.pair_low == low, Message.pair_high == high)


def visible_to(viewer_id: str) -> ColumnElement[bool]:
    """Filter matching messages the viewer takes part in and has not hidden."""
    return or_(
        and_(Message.sender_id == viewer_id, Message.hidden_for_sender.is_(False)),
        and_(Message.receiver_id == viewer_id, Message.hidden_for_receiver.is_(False)),
    )


@dataclass(frozen=True)
class MessagePage:
    """One slice of a conversation in ascending ``(sent_at, id)`` order."""

    items: list[Message]
    page: int
    page_size: int
    total: int

    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total


class MessageRepository:
    """Thin wrapper around database access for chat messages."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with an async SQLAlchemy session."""
        self.session = session

    @staticmethod
    def clean_body(body: str) -> str:
        """Return the stored form of ``body`` or raise if it cannot be sent."""
        cleaned = (body or "").strip()
        if not cleaned:
            raise ValidationError("message body must not be empty")
        if len(cleaned) > settings.message_max_length:
            raise ValidationError(
                f"message body exceeds {settings.message_max_length} characters"
            )
        return cleaned

    @staticmethod
    def clamp_page_size(page_size: int | None) -> int:
        if page_size is None:
            page_size = settings.default_page_size
        return max(1, min(page_size, settings.max_page_size))

    @store_call
    async def append(
        self,
        *,
        sender_id: str,
        receiver_id: str,
        body: str,
        book_id: str | None = None,
        sent_at: datetime | None = None,
    ) -> Message:
        """Insert a new message and return the persisted ORM instance.

        Args:
            sender_id: Author of the message.
            receiver_id: Recipient; must differ from the sender.
            body: Text content; surrounding whitespace is stripped.
            book_id: Listing the message refers to, if any.
            sent_at: Send time, defaults to now (UTC).

        Raises:
            ValidationError: On self-messaging or an empty/oversized body.
        """
        if not sender_id or not receiver_id:
            raise ValidationError("sender and receiver are required")
        if sender_id == receiver_id:
            raise ValidationError("cannot send a message to yourself")
        cleaned = self.clean_body(body)

        low, high = pair_key(sender_id, receiver_id)
        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            pair_low=low,
            pair_high=high,
            book_id=book_id,
            body=cleaned,
            sent_at=sent_at or utcnow(),
        )
        self.session.add(message)
        await self.session.flush()
        return message

    @store_call
    async def get_by_id(self, message_id: int) -> Message:
        """Return a message by identifier."""
        message = await self.session.get(Message, message_id)
        if message is None:
            raise NotFoundError("message")
        return message

    @store_call
    async def list_between(
        self,
        viewer_id: str,
        counterpart_id: str,
        page: int = 1,
        page_size: int | None = None,
    ) -> MessagePage:
        """Return one page of the conversation as seen by ``viewer_id``.

        Rows the viewer has hidden are skipped. Ordering is ascending by
        ``sent_at`` with ``id`` breaking ties, so a page is stable across
        repeated requests as long as nothing new is written.
        """
        if viewer_id == counterpart_id:
            raise ValidationError("a conversation needs two different users")
        if page < 1:
            raise ValidationError("page must be 1 or greater")
        size = self.clamp_page_size(page_size)

        condition = and_(between(viewer_id, counterpart_id), visible_to(viewer_id))
        total = await self.session.scalar(
            select(func.count()).select_from(Message).where(condition)
        )
        result = await self.session.execute(
            select(Message)
            .where(condition)
            .order_by(Message.sent_at.asc(), Message.id.asc())
            .offset((page - 1) * size)
            .limit(size)
        )
        return MessagePage(
            items=list(result.scalars()),
            page=page,
            page_size=size,
            total=int(total or 0),
        )

    @store_call
    async def count_between(self, user_a: str, user_b: str) -> int:
        """Return how many messages the pair exchanged, hidden ones included."""
        total = await self.session.scalar(
            select(func.count()).select_from(Message).where(between(user_a, user_b))
        )
        return int(total or 0)

    @store_call
    async def latest_visible_per_counterpart(self, viewer_id: str) -> list[tuple[str, Message]]:
        """Return ``(counterpart_id, latest message)`` for every visible conversation.

        Newest conversation first.
        """
        counterpart = case(
            (Message.sender_id == viewer_id, Message.receiver_id),
            else_=Message.sender_id,
        )
        ranked = (
            select(
                Message.id.label("message_id"),
                counterpart.label("counterpart_id"),
                func.row_number()
                .over(
                    partition_by=counterpart,
                    order_by=(Message.sent_at.desc(), Message.id.desc()),
                )
                .label("row_rank"),
            )
            .where(visible_to(viewer_id))
            .subquery()
        )
        result = await self.session.execute(
            select(ranked.c.counterpart_id, Message)
            .select_from(Message)
            .join(ranked, ranked.c.message_id == Message.id)
            .where(ranked.c.row_rank == 1)
            .order_by(Message.sent_at.desc(), Message.id.desc())
        )
        return [(counterpart_id, message) for counterpart_id, message in result.all()]
