"""Conversation Aggregator: the viewer's chat list, one row per counterpart."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.repositories.block_repo import BlockRepository, BlockStatus
from marketchat.repositories.message_repo import MessageRepository
from marketchat.services.directory import SqlUserDirectory, UserDirectory
from marketchat.services.read_state import ReadStateTracker


@dataclass(frozen=True)
class ConversationSummary:
    """Derived view of one conversation for one viewer. Never stored."""

    counterpart_id: str
    counterpart_name: str | None
    last_message_id: int
    last_message_body: str
    last_message_time: datetime
    last_message_is_mine: bool
    unread_count: int
    viewer_blocks_counterpart: bool
    counterpart_blocks_viewer: bool


class ConversationAggregator:
    """Build chat lists from the store at request time.

    Every call reads committed state directly; nothing is cached between
    requests.
    """

    def __init__(self, session: AsyncSession, *, directory: UserDirectory | None = None) -> None:
        self.messages = MessageRepository(session)
        self.blocks = BlockRepository(session)
        self.read_state = ReadStateTracker(session)
        self.directory = directory or SqlUserDirectory(session)

    async def list_for(self, viewer_id: str) -> list[ConversationSummary]:
        """Return the viewer's conversations, most recently active first.

        A counterpart appears only while at least one message between the
        pair is still visible to the viewer.
        """
        latest = await self.messages.latest_visible_per_counterpart(viewer_id)
        if not latest:
            return []

        counterpart_ids = [counterpart_id for counterpart_id, _ in latest]
        unread = await self.read_state.unread_counts_by_counterpart(viewer_id)
        statuses = await self.blocks.statuses(viewer_id, counterpart_ids)
        names = await self.directory.display_names(counterpart_ids)

        summaries = []
        for counterpart_id, message in latest:
            status = statuses.get(counterpart_id, BlockStatus())
            summaries.append(
                ConversationSummary(
                    counterpart_id=counterpart_id,
                    counterpart_name=names.get(counterpart_id),
                    last_message_id=message.id,
                    last_message_body=message.body,
                    last_message_time=message.sent_at,
                    last_message_is_mine=message.sender_id == viewer_id,
                    unread_count=unread.get(counterpart_id, 0),
                    viewer_blocks_counterpart=status.a_blocks_b,
                    counterpart_blocks_viewer=status.b_blocks_a,
                )
            )
        return summaries
