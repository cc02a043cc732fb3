# src/marketchat/api/v1/endpoints/messages.py
"""Message endpoints: sending, fetching a single message, unread totals."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from marketchat.api.v1.dependencies import CurrentViewerDep, SessionDep
from marketchat.core.errors import NotFoundError, PermissionDeniedError
from marketchat.models import Message
from marketchat.repositories.message_repo import MessageRepository
from marketchat.schemas.chat import (
    MessageResponse,
    SendMessageRequest,
    SentMessageResponse,
    UnreadCountResponse,
)
from marketchat.schemas.common import ERROR_RESPONSES
from marketchat.services.read_state import ReadStateTracker
from marketchat.services.send_pipeline import SendPipeline

router = APIRouter(prefix="/chat", tags=["messages"], responses=ERROR_RESPONSES)


def serialize_message(message: Message, viewer_id: str) -> MessageResponse:
    """Serialize a Message row for ``viewer_id``."""
    return MessageResponse(
        id=message.id,
        sender_id=message.sender_id,
        receiver_id=message.receiver_id,
        book_id=message.book_id,
        body=message.body,
        sent_at=message.sent_at,
        read_at=message.read_at,
        is_mine=message.sender_id == viewer_id,
    )


@router.post("/messages", status_code=status.HTTP_201_CREATED, response_model=SentMessageResponse)
async def send_message(
    payload: SendMessageRequest,
    viewer_id: CurrentViewerDep,
    db: SessionDep,
) -> SentMessageResponse:
    """Send a message to the owner of a book listing."""
    sent = await SendPipeline(db).send(viewer_id, payload.book_id, payload.body)
    return SentMessageResponse(
        message=serialize_message(sent.message, viewer_id),
        listing_name=sent.listing_name,
        owner_name=sent.owner_name,
        price=sent.price,
    )


@router.get("/messages/{message_id}", response_model=MessageResponse)
async def get_message(
    message_id: int,
    viewer_id: CurrentViewerDep,
    db: SessionDep,
) -> MessageResponse:
    """Return one message the viewer takes part in and has not hidden."""
    message = await MessageRepository(db).get_by_id(message_id)
    if not message.involves(viewer_id):
        raise PermissionDeniedError("message belongs to another conversation")
    if message.is_hidden_for(viewer_id):
        raise NotFoundError("message")
    return serialize_message(message, viewer_id)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
    counterpart_id: str | None = Query(None, max_length=64),
) -> UnreadCountResponse:
    """Count unread messages, overall or for one counterpart."""
    count = await ReadStateTracker(db).unread_count(viewer_id, counterpart_id)
    return UnreadCountResponse(counterpart_id=counterpart_id, unread_count=count)
