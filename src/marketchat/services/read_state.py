"""Read-State Tracker: marks received messages read and counts unread ones."""
from __future__ import annotations

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from marketchat.core.errors import ValidationError
from marketchat.db.guard import commit, store_call
from marketchat.db.time import utcnow
from marketchat.models.message import Message

logger = logging.getLogger(__name__)


def _unread_for(viewer_id: str) -> list[ColumnElement[bool]]:
    return [
        Message.receiver_id == viewer_id,
        Message.read_at.is_(None),
        Message.hidden_for_receiver.is_(False),
    ]


class ReadStateTracker:
    """Read receipts for messages received by a viewer."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @store_call
    async def _mark(self, viewer_id: str, counterpart_id: str) -> int:
        result = await self.session.execute(
            update(Message)
            .where(
                Message.receiver_id == viewer_id,
                Message.sender_id == counterpart_id,
                Message.read_at.is_(None),
            )
            .values(read_at=utcnow())
        )
        return int(result.rowcount or 0)

    async def mark_read(self, viewer_id: str, counterpart_id: str) -> int:
        """Stamp ``read_at`` on every unread message from ``counterpart_id``.

        ``read_at`` is only ever set where it is still NULL, so repeating the
        call is harmless and returns 0.

        Returns:
            The number of messages this call marked read.
        """
        if viewer_id == counterpart_id:
            raise ValidationError("a conversation needs two different users")
        updated = await self._mark(viewer_id, counterpart_id)
        await commit(self.session)
        if updated:
            logger.debug("Marked %d messages from %s read for %s", updated, counterpart_id, viewer_id)
        return updated

    @store_call
    async def unread_count(self, viewer_id: str, counterpart_id: str | None = None) -> int:
        """Count unread messages received by the viewer and still visible to them.

        When ``counterpart_id`` is given only that conversation is counted.
        """
        conditions = _unread_for(viewer_id)
        if counterpart_id is not None:
            conditions.append(Message.sender_id == counterpart_id)
        total = await self.session.scalar(
            select(func.count()).select_from(Message).where(*conditions)
        )
        return int(total or 0)

    @store_call
    async def unread_counts_by_counterpart(self, viewer_id: str) -> dict[str, int]:
        """Return unread counts for every counterpart with unread messages."""
        result = await self.session.execute(
            select(Message.sender_id, func.count())
            .where(*_unread_for(viewer_id))
            .group_by(Message.sender_id)
        )
        return {sender_id: int(count) for sender_id, count in result.all()}
