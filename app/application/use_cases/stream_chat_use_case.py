"""Session-scoped streaming chat use case."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import aclosing
from typing import Optional

from app.application.dtos.chat import StreamChatRequest, StreamEvent
from app.application.ports.live_chat_context_cache import LiveChatContextCache
from app.application.ports.llm_client import LLMClient
from app.application.ports.persona_repository import PersonaRepository
from app.application.ports.session_record_repository import SessionRecordRepository
from app.application.use_cases.check_intent import CheckIntent
from app.application.use_cases.consultant_messages_zh import ConsultantMessagesZH
from app.domain.entities.persona_config import PersonaConfig
from app.domain.entities.session_record import TurnRole
from app.domain.errors import InvalidChatRequestError, LLMClientError, PersonaNotFoundError
from app.infrastructure.logging.logger import (
    log_context_prepared,
    log_intent_check,
    log_stream_result,
)

_STAGE_PREPARE = "prepare"
_STAGE_STREAM = "stream"
_STAGE_PERSIST = "persist"


class StreamChatUseCase:
    """Route a prompt to a consultant persona and stream the reply.

    A request goes through persona resolution, the intent gate, context
    preparation, streaming and persistence. All work on one session, from
    loading its record to saving it, runs under that session's lock, so
    in-memory and persisted turn order always match.

    A partial reply is never persisted: when streaming or saving fails, or the
    client goes away, neither the user turn nor the model turn of that exchange
    is stored and the live context is left as it was.
    """

    def __init__(
        self,
        persona_repository: PersonaRepository,
        record_repository: SessionRecordRepository,
        context_cache: LiveChatContextCache,
        llm_client: LLMClient,
        check_intent: CheckIntent,
    ) -> None:
        """
        Initialize streaming chat use case.

        Args:
            persona_repository: Consultant persona lookup
            record_repository: Durable conversation history
            context_cache: Live chat contexts keyed by session
            llm_client: Generation backend
            check_intent: Intent relevance gate
        """
        self._persona_repository = persona_repository
        self._record_repository = record_repository
        self._context_cache = context_cache
        self._llm_client = llm_client
        self._check_intent = check_intent

    async def resolve_persona(self, request: StreamChatRequest) -> PersonaConfig:
        """
        Validate the request and resolve its persona.

        Runs before any response is sent, so failures surface as plain client errors.

        Args:
            request: Streaming chat request

        Returns:
            Persona configuration

        Raises:
            InvalidChatRequestError: If prompt, sessionId or consultantId is empty
            PersonaNotFoundError: If the consultant id is unknown
        """
        missing = request.missing_fields()
        if missing:
            raise InvalidChatRequestError(ConsultantMessagesZH.missing_fields(missing))

        persona = await self._persona_repository.get(request.consultant_id)
        if persona is None:
            raise PersonaNotFoundError(request.consultant_id)
        return persona

    async def stream(
        self,
        request: StreamChatRequest,
        persona: PersonaConfig,
        turn_id: Optional[str] = None,
    ) -> AsyncIterator[StreamEvent]:
        """
        Stream the reply to a validated request.

        Args:
            request: Streaming chat request
            persona: Persona returned by resolve_persona
            turn_id: Optional turn identifier for logging

        Yields:
            Text events in backend order, then one final or error event
        """
        turn_id = turn_id or "unknown"
        session_id = request.session_id

        relevant = await self._check_intent.is_relevant(persona, request.prompt)
        log_intent_check(session_id, turn_id, persona.id, relevant)
        if not relevant:
            log_stream_result(session_id, turn_id, "rejected", fragments_count=0, reply_length=0)
            yield StreamEvent.error(ConsultantMessagesZH.off_topic(persona))
            return

        async with self._context_cache.session_lock(session_id):
            async with aclosing(self._run_exchange(request, persona, turn_id)) as events:
                async for event in events:
                    yield event

    async def _run_exchange(
        self,
        request: StreamChatRequest,
        persona: PersonaConfig,
        turn_id: str,
    ) -> AsyncIterator[StreamEvent]:
        """Prepare context, stream and persist one exchange. Caller holds the session lock."""
        session_id = request.session_id
        stage = _STAGE_PREPARE
        fragments: Optional[AsyncIterator[str]] = None
        buffer: list[str] = []

        try:
            record = await self._record_repository.get(session_id)
            if record is None:
                record = await self._record_repository.create(session_id, persona.id)
            previous_consultant_id = record.consultant_id
            if record.rebind(persona.id):
                self._context_cache.invalidate(session_id)
            else:
                previous_consultant_id = None

            persisted_history = list(record.history)
            context, rebuilt = self._context_cache.get_or_create(
                session_id, persona, lambda: persisted_history
            )
            log_context_prepared(
                session_id,
                turn_id,
                persona.id,
                rebuilt=rebuilt,
                history_length=len(persisted_history),
                previous_consultant_id=previous_consultant_id,
            )
            record.append_turn(TurnRole.USER, request.prompt)

            stage = _STAGE_STREAM
            fragments = self._llm_client.stream_reply(context, request.prompt)
            async for fragment in fragments:
                if not fragment:
                    continue
                buffer.append(fragment)
                yield StreamEvent.text(fragment)
            reply = "".join(buffer)

            stage = _STAGE_PERSIST
            record.append_turn(TurnRole.MODEL, reply)
            record.touch()
            await self._record_repository.save(record)
            context.append_exchange(request.prompt, reply)
        except (asyncio.CancelledError, GeneratorExit):
            log_stream_result(
                session_id,
                turn_id,
                "cancelled",
                fragments_count=len(buffer),
                reply_length=sum(len(fragment) for fragment in buffer),
                stage=stage,
            )
            raise
        except Exception as e:
            log_stream_result(
                session_id,
                turn_id,
                "error",
                fragments_count=len(buffer),
                reply_length=sum(len(fragment) for fragment in buffer),
                level=logging.ERROR,
                stage=stage,
                error=str(e),
            )
            yield StreamEvent.error(self._error_message(stage, e))
            return
        finally:
            aclose = getattr(fragments, "aclose", None)
            if aclose is not None:
                await aclose()

        log_stream_result(
            session_id,
            turn_id,
            "completed",
            fragments_count=len(buffer),
            reply_length=len(reply),
            history_length=len(record.history),
        )
        yield StreamEvent.final(ConsultantMessagesZH.STREAM_COMPLETED)

    @staticmethod
    def _error_message(stage: str, error: Exception) -> str:
        """
        Map a failure to a client-safe message.

        Args:
            stage: Stage in which the failure happened
            error: The failure

        Returns:
            Sanitized message
        """
        if stage == _STAGE_STREAM and isinstance(error, LLMClientError):
            cause = error.__cause__ or error
            return ConsultantMessagesZH.stream_failed(type(cause).__name__)
        if stage == _STAGE_PERSIST:
            return ConsultantMessagesZH.PERSISTENCE_FAILED
        return ConsultantMessagesZH.UNEXPECTED_ERROR

