"""Block Registry: directed block relationships between user pairs."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import and_, delete, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.core.errors import NotFoundError, ValidationError
from marketchat.core.settings import settings
from marketchat.db.guard import store_call
from marketchat.models.block import UserBlock

__all__ = ["BlockRepository", "BlockStatus"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockStatus:
    """Block state between ``a`` and ``b``, one flag per direction."""

    a_blocks_b: bool = False
    b_blocks_a: bool = False


class BlockRepository:
    """Data access helpers for directed user blocks."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _find(self, blocker_id: str, blocked_id: str) -> UserBlock | None:
        result = await self.session.execute(
            select(UserBlock).where(
                UserBlock.blocker_id == blocker_id,
                UserBlock.blocked_id == blocked_id,
            )
        )
        return result.scalars().first()

    @store_call
    async def block(
        self,
        blocker_id: str,
        blocked_id: str,
        reason: str | None = None,
    ) -> tuple[UserBlock, bool]:
        """Create the block ``blocker_id -> blocked_id`` if it does not exist yet.

        Returns:
            The active block record and whether this call created it. An
            existing record is returned unchanged, including its reason.

        Raises:
            ValidationError: If a user tries to block themselves or the reason
                is too long.
        """
        if blocker_id == blocked_id:
            raise ValidationError("cannot block yourself")
        existing = await self._find(blocker_id, blocked_id)
        if existing is not None:
            return existing, False

        reason = reason.strip() if reason else None
        if reason and len(reason) > settings.block_reason_max_length:
            raise ValidationError(
                f"reason exceeds {settings.block_reason_max_length} characters"
            )

        record = UserBlock(blocker_id=blocker_id, blocked_id=blocked_id, reason=reason or None)
        try:
            async with self.session.begin_nested():
                self.session.add(record)
                await self.session.flush()
        except IntegrityError:
            # A concurrent duplicate request won the insert; return its row.
            existing = await self._find(blocker_id, blocked_id)
            if existing is None:
                raise
            logger.debug("Block %s -> %s created concurrently", blocker_id, blocked_id)
            return existing, False
        return record, True

    @store_call
    async def unblock(self, blocker_id: str, blocked_id: str) -> None:
        """Delete the block ``blocker_id -> blocked_id``.

        Raises:
            NotFoundError: If no such block exists.
        """
        result = await self.session.execute(
            delete(UserBlock).where(
                UserBlock.blocker_id == blocker_id,
                UserBlock.blocked_id == blocked_id,
            )
        )
        if not result.rowcount:
            raise NotFoundError("block")

    @store_call
    async def status(self, user_a: str, user_b: str) -> BlockStatus:
        """Return the block flags between two users, one per direction."""
        result = await self.session.execute(
            select(UserBlock.blocker_id).where(
                or_(
                    and_(UserBlock.blocker_id == user_a, UserBlock.blocked_id == user_b),
                    and_(UserBlock.blocker_id == user_b, UserBlock.blocked_id == user_a),
                )
            )
        )
        blockers = set(result.scalars())
        return BlockStatus(a_blocks_b=user_a in blockers, b_blocks_a=user_b in blockers)

    @store_call
    async def statuses(self, viewer_id: str, counterpart_ids: Iterable[str]) -> dict[str, BlockStatus]:
        """Return ``status(viewer_id, c)`` for every counterpart in one query."""
        ids = set(counterpart_ids)
        if not ids:
            return {}
        result = await self.session.execute(
            select(UserBlock.blocker_id, UserBlock.blocked_id).where(
                or_(
                    and_(UserBlock.blocker_id == viewer_id, UserBlock.blocked_id.in_(ids)),
                    and_(UserBlock.blocked_id == viewer_id, UserBlock.blocker_id.in_(ids)),
                )
            )
        )
        viewer_blocks: set[str] = set()
        blocks_viewer: set[str] = set()
        for blocker_id, blocked_id in result.all():
            if blocker_id == viewer_id:
                viewer_blocks.add(blocked_id)
            else:
                blocks_viewer.add(blocker_id)
        return {
            counterpart_id: BlockStatus(
                a_blocks_b=counterpart_id in viewer_blocks,
                b_blocks_a=counterpart_id in blocks_viewer,
            )
            for counterpart_id in ids
        }

    @store_call
    async def list_blocked_by(self, user_id: str) -> list[UserBlock]:
        """Return the blocks created by ``user_id``, newest first."""
        result = await self.session.execute(
            select(UserBlock)
            .where(UserBlock.blocker_id == user_id)
            .order_by(UserBlock.created_at.desc(), UserBlock.id.desc())
        )
        return list(result.scalars())
