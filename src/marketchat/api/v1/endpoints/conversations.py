# src/marketchat/api/v1/endpoints/conversations.py
"""Conversation endpoints: chat list, history, read receipts and hiding."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, Query

from marketchat.api.v1.dependencies import CurrentViewerDep, SessionDep
from marketchat.repositories.message_repo import MessageRepository
from marketchat.schemas.chat import (
    ConversationResponse,
    HideConversationResponse,
    MarkReadResponse,
    MessagePageResponse,
)
from marketchat.schemas.common import ERROR_RESPONSES
from marketchat.services.conversations import ConversationAggregator
from marketchat.services.read_state import ReadStateTracker
from marketchat.services.visibility import VisibilityLayer

from .messages import serialize_message

router = APIRouter(prefix="/chat/conversations", tags=["conversations"], responses=ERROR_RESPONSES)

CounterpartId = Annotated[str, Path(min_length=1, max_length=64)]


@router.get("", response_model=list[ConversationResponse])
async def list_conversations(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
) -> list[ConversationResponse]:
    """Return the viewer's chat list, most recent conversation first."""
    summaries = await ConversationAggregator(db).list_for(viewer_id)
    return [ConversationResponse.model_validate(summary) for summary in summaries]


@router.get("/{counterpart_id}/messages", response_model=MessagePageResponse)
async def list_messages(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
    counterpart_id: CounterpartId,
    page: int = Query(1),
    page_size: int | None = Query(None),
) -> MessagePageResponse:
    """Return one page of the conversation with ``counterpart_id``, oldest first."""
    result = await MessageRepository(db).list_between(viewer_id, counterpart_id, page, page_size)
    return MessagePageResponse(
        items=[serialize_message(message, viewer_id) for message in result.items],
        page=result.page,
        page_size=result.page_size,
        total=result.total,
        has_more=result.has_more,
    )


@router.post("/{counterpart_id}/read", response_model=MarkReadResponse)
async def mark_conversation_read(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
    counterpart_id: CounterpartId,
) -> MarkReadResponse:
    """Mark everything ``counterpart_id`` sent to the viewer as read."""
    updated = await ReadStateTracker(db).mark_read(viewer_id, counterpart_id)
    return MarkReadResponse(counterpart_id=counterpart_id, updated=updated)


@router.delete("/{counterpart_id}", response_model=HideConversationResponse)
async def hide_conversation(
    viewer_id: CurrentViewerDep,
    db: SessionDep,
    counterpart_id: CounterpartId,
) -> HideConversationResponse:
    """Hide the conversation for the viewer; the counterpart keeps their copy."""
    result = await VisibilityLayer(db).hide_conversation(viewer_id, counterpart_id)
    return HideConversationResponse(
        counterpart_id=result.counterpart_id,
        hidden_count=result.hidden_count,
    )
