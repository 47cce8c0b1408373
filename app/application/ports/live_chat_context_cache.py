"""Live chat context cache port."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from app.domain.entities.live_chat_context import LiveChatContext
from app.domain.entities.persona_config import PersonaConfig
from app.domain.entities.session_record import ConversationTurn


class LiveChatContextCache(ABC):
    """Port interface for the process-wide session -> live context mapping."""

    @abstractmethod
    def session_lock(self, session_id: str) -> AbstractAsyncContextManager[None]:
        """
        Serialize work on one session.

        Args:
            session_id: Session identifier

        Returns:
            Async context manager holding the session's lock
        """
        pass

    @abstractmethod
    def get_or_create(
        self,
        session_id: str,
        persona: PersonaConfig,
        prior_history: Callable[[], list[ConversationTurn]],
    ) -> tuple[LiveChatContext, bool]:
        """
        Return the live context for a session, rebuilding it when needed.

        Args:
            session_id: Session identifier
            persona: Persona the request is addressed to
            prior_history: Supplies persisted turns, called only on rebuild

        Returns:
            Tuple of (context, rebuilt)
        """
        pass

    @abstractmethod
    def invalidate(self, session_id: str) -> None:
        """
        Drop the live context for a session.

        Args:
            session_id: Session identifier
        """
        pass
