"""Session record entity and conversation turns."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class TurnRole(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class ConversationTurn:
    """Single role-tagged message in a conversation."""

    role: TurnRole
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class SessionRecord:
    """Durable conversation history for one session."""

    session_id: str
    consultant_id: str
    history: list[ConversationTurn] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)

    def append_turn(self, role: TurnRole, text: str) -> ConversationTurn:
        """
        Append a turn to the history.

        Args:
            role: Turn author
            text: Full turn content

        Returns:
            The appended turn
        """
        turn = ConversationTurn(role=role, text=text)
        self.history.append(turn)
        return turn

    def rebind(self, consultant_id: str) -> bool:
        """
        Bind the record to another consultant.

        Args:
            consultant_id: Consultant now serving the session

        Returns:
            True if the bound consultant changed
        """
        if self.consultant_id == consultant_id:
            return False
        self.consultant_id = consultant_id
        return True

    def first_user_text(self) -> Optional[str]:
        """Return the text of the first user turn, if any."""
        for turn in self.history:
            if turn.role == TurnRole.USER:
                return turn.text
        return None
