# src/marketchat/models/__init__.py
"""SQLAlchemy models for the messaging service."""

from .block import UserBlock
from .marketplace import Book, User
from .message import Message

__all__ = [
    "Book",
    "Message",
    "User",
    "UserBlock",
]
