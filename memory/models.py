"""Memory data models."""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

from llm.base_client import Message


class ConversationTurn(BaseModel):
    """A single committed turn in a conversation."""
    model_config = ConfigDict(frozen=True)

    turn_id: int
    message: Message  # role "user", "assistant" or "tool"
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def role(self) -> str:
        return self.message.role
