"""Chat-related Pydantic schemas."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SendMessageRequest(BaseModel):
    """Schema for sending a message about a book listing."""

    book_id: str = Field(..., min_length=1, max_length=64, description="Listing the message is about")
    body: str = Field(..., description="Message text; must contain non-whitespace characters")


class MessageResponse(BaseModel):
    """Schema for a single message returned by the API."""

    id: int
    sender_id: str
    receiver_id: str
    book_id: str | None
    body: str
    sent_at: datetime
    read_at: datetime | None
    is_mine: bool = False

    model_config = ConfigDict(from_attributes=True)


class SentMessageResponse(BaseModel):
    """Schema returned after a successful send, with listing details."""

    message: MessageResponse
    listing_name: str
    owner_name: str | None
    price: Decimal


class MessagePageResponse(BaseModel):
    """One page of a conversation, oldest message first."""

    items: list[MessageResponse]
    page: int
    page_size: int
    total: int
    has_more: bool


class ConversationResponse(BaseModel):
    """One row of the viewer's chat list."""

    counterpart_id: str
    counterpart_name: str | None
    last_message_id: int
    last_message_body: str
    last_message_time: datetime
    last_message_is_mine: bool
    unread_count: int
    viewer_blocks_counterpart: bool
    counterpart_blocks_viewer: bool

    model_config = ConfigDict(from_attributes=True)


class MarkReadResponse(BaseModel):
    counterpart_id: str
    updated: int


class HideConversationResponse(BaseModel):
    counterpart_id: str
    hidden_count: int


class UnreadCountResponse(BaseModel):
    counterpart_id: str | None = None
    unread_count: int
