"""In-memory conversation session."""

import uuid
import logging
from typing import List, Tuple

from llm.base_client import Message
from .models import ConversationTurn

logger = logging.getLogger(__name__)


class ConversationSession:
    """
    Append-only log of the turns in one chat.

    Turns are never edited or removed. Starting over means discarding the
    session and creating a new one.
    """

    ROLES = ("user", "assistant", "tool")

    def __init__(self):
        self.session_id = str(uuid.uuid4())
        self._turns: List[ConversationTurn] = []

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def turns(self) -> Tuple[ConversationTurn, ...]:
        return tuple(self._turns)

    @property
    def messages(self) -> List[Message]:
        """Messages of all committed turns, oldest first."""
        return [turn.message for turn in self._turns]

    def append(self, message: Message) -> ConversationTurn:
        """
        Commit a new turn.

        Raises:
            ValueError: If the message role is not user, assistant or tool
        """
        if message.role not in self.ROLES:
            raise ValueError(f"Unsupported turn role: {message.role}")

        turn = ConversationTurn(turn_id=len(self._turns) + 1, message=message)
        self._turns.append(turn)
        logger.debug(f"Session {self.session_id[:8]}: committed {message.role} turn {turn.turn_id}")
        return turn
