# src/marketchat/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .blocks import router as blocks_router
from .conversations import router as conversations_router
from .messages import router as messages_router

__all__ = [
    "blocks_router",
    "conversations_router",
    "messages_router",
]
