"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .block import BlockedUserResponse, BlockRequest, BlockResponse, BlockStatusResponse
from .chat import (
    ConversationResponse,
    HideConversationResponse,
    MarkReadResponse,
    MessagePageResponse,
    MessageResponse,
    SendMessageRequest,
    SentMessageResponse,
    UnreadCountResponse,
)
from .common import ERROR_RESPONSES, ErrorDetail, ErrorResponse

__all__ = [
    "BlockRequest", "BlockResponse", "BlockStatusResponse", "BlockedUserResponse",
    "ConversationResponse", "HideConversationResponse", "MarkReadResponse",
    "MessagePageResponse", "MessageResponse", "SendMessageRequest",
    "SentMessageResponse", "UnreadCountResponse",
    "ERROR_RESPONSES", "ErrorDetail", "ErrorResponse",
]
