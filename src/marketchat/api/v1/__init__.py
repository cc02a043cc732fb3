# src/marketchat/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    blocks_router,
    conversations_router,
    messages_router,
)

__all__ = [
    "blocks_router",
    "conversations_router",
    "messages_router",
]
