"""Viewer-facing block operations built on the Block Registry."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.core.errors import NotFoundError
from marketchat.db.guard import commit
from marketchat.models.block import UserBlock
from marketchat.repositories.block_repo import BlockRepository, BlockStatus
from marketchat.services.directory import SqlUserDirectory, UserDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockedUser:
    user_id: str
    user_name: str | None
    blocked_at: datetime
    reason: str | None


@dataclass(frozen=True)
class BlockOutcome:
    """Result of a block request; ``created`` is False when it already existed."""

    record: UserBlock
    created: bool
    blocked_user_name: str | None


class BlockService:
    """Block, unblock and inspect block state on behalf of a viewer."""

    def __init__(self, session: AsyncSession, *, directory: UserDirectory | None = None) -> None:
        self.session = session
        self.blocks = BlockRepository(session)
        self.directory = directory or SqlUserDirectory(session)

    async def _require_user(self, user_id: str) -> None:
        if not await self.directory.exists(user_id):
            raise NotFoundError("user")

    async def block(
        self,
        viewer_id: str,
        target_id: str,
        reason: str | None = None,
    ) -> BlockOutcome:
        """Block ``target_id`` for ``viewer_id``; repeating the call is a no-op."""
        await self._require_user(target_id)
        record, created = await self.blocks.block(viewer_id, target_id, reason)
        await commit(self.session)
        if created:
            logger.info("User %s blocked %s", viewer_id, target_id)
        name = await self.directory.display_name(target_id)
        return BlockOutcome(record=record, created=created, blocked_user_name=name)

    async def unblock(self, viewer_id: str, target_id: str) -> None:
        """Remove the viewer's block of ``target_id``."""
        await self.blocks.unblock(viewer_id, target_id)
        await commit(self.session)
        logger.info("User %s unblocked %s", viewer_id, target_id)

    async def status(self, viewer_id: str, target_id: str) -> BlockStatus:
        await self._require_user(target_id)
        return await self.blocks.status(viewer_id, target_id)

    async def list_blocked(self, viewer_id: str) -> list[BlockedUser]:
        """Return who the viewer has blocked, newest block first."""
        records = await self.blocks.list_blocked_by(viewer_id)
        names = await self.directory.display_names(r.blocked_id for r in records)
        return [
            BlockedUser(
                user_id=record.blocked_id,
                user_name=names.get(record.blocked_id),
                blocked_at=record.created_at,
                reason=record.reason,
            )
            for record in records
        ]
