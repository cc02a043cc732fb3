"""Send Pipeline: validate and commit a new message about a book listing."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from marketchat.core.errors import NotFoundError, PermissionDeniedError, ValidationError
from marketchat.db.guard import commit
from marketchat.models.message import Message
from marketchat.repositories.block_repo import BlockRepository
from marketchat.repositories.message_repo import MessageRepository
from marketchat.services.directory import (
    BookCatalog,
    SqlBookCatalog,
    SqlUserDirectory,
    UserDirectory,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentMessage:
    """A committed message plus listing details looked up for the response.

    Only ``message`` is stored; the listing fields are read-side enrichment.
    """

    message: Message
    listing_name: str
    owner_name: str | None
    price: Decimal


class SendPipeline:
    """Resolve the recipient through listing ownership and commit the message."""

    def __init__(
        self,
        session: AsyncSession,
        *,
        catalog: BookCatalog | None = None,
        directory: UserDirectory | None = None,
    ) -> None:
        self.session = session
        self.messages = MessageRepository(session)
        self.blocks = BlockRepository(session)
        self.catalog = catalog or SqlBookCatalog(session)
        self.directory = directory or SqlUserDirectory(session)

    async def send(self, sender_id: str, book_id: str, body: str) -> SentMessage:
        """Send ``body`` from ``sender_id`` to the owner of ``book_id``.

        Args:
            sender_id: Authenticated sender.
            book_id: Listing the sender is asking about; its owner is the recipient.
            body: Message text.

        Returns:
            The stored message with the listing name, owner name and price.

        Raises:
            NotFoundError: The listing does not exist.
            ValidationError: The sender owns the listing, or the body is empty.
            PermissionDeniedError: The owner has blocked the sender.

        Notes:
            Only the owner's block of the sender matters here. A sender who
            blocked the owner can still write to them.
        """
        listing = await self.catalog.get_listing(book_id)
        if listing is None:
            raise NotFoundError("book")
        owner_id = listing.owner_id
        if owner_id == sender_id:
            raise ValidationError("cannot message own listing")

        status = await self.blocks.status(sender_id, owner_id)
        if status.b_blocks_a:
            raise PermissionDeniedError("blocked by recipient")

        message = await self.messages.append(
            sender_id=sender_id,
            receiver_id=owner_id,
            body=body,
            book_id=listing.book_id,
        )
        await commit(self.session)
        logger.info(
            "Message %s sent from %s to %s about book %s",
            message.id,
            sender_id,
            owner_id,
            listing.book_id,
        )

        owner_name = await self.directory.display_name(owner_id)
        return SentMessage(
            message=message,
            listing_name=listing.name,
            owner_name=owner_name,
            price=listing.price,
        )
