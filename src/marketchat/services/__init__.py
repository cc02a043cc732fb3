# src/marketchat/services/__init__.py
"""Business logic services for the messaging subsystem."""

from .blocking import BlockService
from .conversations import ConversationAggregator
from .read_state import ReadStateTracker
from .send_pipeline import SendPipeline
from .visibility import VisibilityLayer

__all__ = [
    "BlockService",
    "ConversationAggregator",
    "ReadStateTracker",
    "SendPipeline",
    "VisibilityLayer",
]
