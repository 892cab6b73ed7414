"""Conversation session memory."""

from .models import ConversationTurn
from .session import ConversationSession

__all__ = [
    "ConversationTurn",
    "ConversationSession",
]
