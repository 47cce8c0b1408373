"""Live chat context entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.domain.entities.session_record import ConversationTurn, TurnRole


@dataclass(frozen=True)
class PrimingTurn:
    """Role and text pair presented to the generation backend."""

    role: TurnRole
    text: str


@dataclass
class LiveChatContext:
    """In-memory priming state used to drive generation for one session."""

    session_id: str
    consultant_id: str
    system_instruction: str
    turns: list[PrimingTurn] = field(default_factory=list)
    last_used_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_history(
        cls,
        session_id: str,
        consultant_id: str,
        system_instruction: str,
        history: list[ConversationTurn],
    ) -> "LiveChatContext":
        """
        Build a context from persisted turns, keeping their stored order.

        Args:
            session_id: Session identifier
            consultant_id: Consultant the context is bound to
            system_instruction: Persona instruction passed verbatim to the backend
            history: Persisted conversation turns

        Returns:
            New live chat context
        """
        return cls(
            session_id=session_id,
            consultant_id=consultant_id,
            system_instruction=system_instruction,
            turns=[PrimingTurn(role=turn.role, text=turn.text) for turn in history],
        )

    def append_exchange(self, prompt: str, reply: str) -> None:
        """Record a completed user/model exchange."""
        self.turns.append(PrimingTurn(role=TurnRole.USER, text=prompt))
        self.turns.append(PrimingTurn(role=TurnRole.MODEL, text=reply))

    def touch(self) -> None:
        """Update the last_used_at timestamp."""
        self.last_used_at = datetime.now(timezone.utc)
