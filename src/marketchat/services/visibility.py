"""Visibility Layer: per-viewer soft delete of whole conversations."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.core.errors import NotFoundError, ValidationError
from marketchat.db.guard import commit, store_call
from marketchat.db.time import utcnow
from marketchat.models.message import Message
from marketchat.repositories.message_repo import MessageRepository, between

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HideResult:
    counterpart_id: str
    hidden_count: int


class VisibilityLayer:
    """Hide a conversation for one participant without touching the other's view."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.messages = MessageRepository(session)

    @store_call
    async def _hide_rows(self, viewer_id: str, counterpart_id: str) -> int:
        now = utcnow()
        pair = between(viewer_id, counterpart_id)
        as_sender = await self.session.execute(
            update(Message)
            .where(
                pair,
                Message.sender_id == viewer_id,
                Message.hidden_for_sender.is_(False),
            )
            .values(hidden_for_sender=True, hidden_for_sender_at=now)
        )
        as_receiver = await self.session.execute(
            update(Message)
            .where(
                pair,
                Message.receiver_id == viewer_id,
                Message.hidden_for_receiver.is_(False),
            )
            .values(hidden_for_receiver=True, hidden_for_receiver_at=now)
        )
        return int(as_sender.rowcount or 0) + int(as_receiver.rowcount or 0)

    async def hide_conversation(self, viewer_id: str, counterpart_id: str) -> HideResult:
        """Hide every message between the pair for ``viewer_id`` only.

        Both updates commit in one transaction, so readers see either the
        whole conversation or none of it. Rows already hidden are left
        alone, which makes a retry a no-op that reports 0.

        Raises:
            NotFoundError: The two users never exchanged a message.
        """
        if viewer_id == counterpart_id:
            raise ValidationError("a conversation needs two different users")
        if not await self.messages.count_between(viewer_id, counterpart_id):
            raise NotFoundError("conversation")

        try:
            hidden = await self._hide_rows(viewer_id, counterpart_id)
            await commit(self.session)
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Conversation %s <-> %s hidden for %s (%d rows)",
                    viewer_id, counterpart_id, viewer_id, hidden)
        return HideResult(counterpart_id=counterpart_id, hidden_count=hidden)
