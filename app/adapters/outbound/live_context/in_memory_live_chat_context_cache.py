"""In-process live chat context cache."""

import asyncio
from collections import OrderedDict
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from app.application.ports.live_chat_context_cache import LiveChatContextCache
from app.domain.entities.live_chat_context import LiveChatContext
from app.domain.entities.persona_config import PersonaConfig
from app.domain.entities.session_record import ConversationTurn
from app.infrastructure.config.settings import settings


class _SessionLock:
    """Lock plus the number of tasks holding or waiting for it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = asyncio.Lock()
        self.users = 0


class InMemoryLiveChatContextCache(LiveChatContextCache):
    """Live chat contexts keyed by session, with idle TTL and LRU bound."""

    def __init__(
        self,
        ttl_seconds: Optional[int] = None,
        max_sessions: Optional[int] = None,
    ) -> None:
        """
        Initialize cache.

        Args:
            ttl_seconds: Idle time after which a context is dropped
            (defaults to settings.live_context_ttl_seconds).
            max_sessions: Maximum number of live contexts
            (defaults to settings.live_context_max_sessions).
        """
        self._contexts: OrderedDict[str, LiveChatContext] = OrderedDict()
        self._locks: dict[str, _SessionLock] = {}
        self._ttl_seconds = ttl_seconds or settings.live_context_ttl_seconds
        self._max_sessions = max_sessions or settings.live_context_max_sessions

    def __len__(self) -> int:
        return len(self._contexts)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._contexts

    @asynccontextmanager
    async def session_lock(self, session_id: str) -> AsyncIterator[None]:
        """
        Serialize work on one session.

        Lock objects are created on demand and dropped once no task holds or
        waits for them.

        Args:
            session_id: Session identifier
        """
        entry = self._locks.get(session_id)
        if entry is None:
            entry = self._locks[session_id] = _SessionLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[session_id]

    def _purge_expired(self) -> None:
        """Remove contexts idle for longer than the TTL."""
        now = datetime.now(timezone.utc)
        expired_sessions = [
            session_id
            for session_id, context in self._contexts.items()
            if (now - context.last_used_at).total_seconds() > self._ttl_seconds
        ]
        for session_id in expired_sessions:
            del self._contexts[session_id]

    def get_or_create(
        self,
        session_id: str,
        persona: PersonaConfig,
        prior_history: Callable[[], list[ConversationTurn]],
    ) -> tuple[LiveChatContext, bool]:
        """
        Return the live context for a session, rebuilding it when needed.

        A context is rebuilt when none exists for the session or when the
        existing one is bound to another consultant.

        Args:
            session_id: Session identifier
            persona: Persona the request is addressed to
            prior_history: Supplies persisted turns, called only on rebuild

        Returns:
            Tuple of (context, rebuilt)
        """
        self._purge_expired()
        context = self._contexts.get(session_id)
        if context is not None and context.consultant_id == persona.id:
            context.touch()
            self._contexts.move_to_end(session_id)
            return context, False

        context = LiveChatContext.from_history(
            session_id=session_id,
            consultant_id=persona.id,
            system_instruction=persona.system_instruction,
            history=prior_history(),
        )
        self._contexts[session_id] = context
        self._contexts.move_to_end(session_id)
        while len(self._contexts) > self._max_sessions:
            self._contexts.popitem(last=False)
        return context, True

    def invalidate(self, session_id: str) -> None:
        """
        Drop the live context for a session.

        Args:
            session_id: Session identifier
        """
        self._contexts.pop(session_id, None)
