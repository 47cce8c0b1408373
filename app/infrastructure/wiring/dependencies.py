"""Dependency injection factory functions."""

from functools import lru_cache

from app.adapters.outbound.live_context.in_memory_live_chat_context_cache import (
    InMemoryLiveChatContextCache,
)
from app.adapters.outbound.persona import PostgresPersonaRepository, StaticPersonaRepository
from app.adapters.outbound.session_record import (
    CachedSessionRecordRepository,
    InMemorySessionRecordRepository,
    PostgresSessionRecordRepository,
    RedisSessionRecordCache,
)
from app.application.ports.live_chat_context_cache import LiveChatContextCache
from app.application.ports.llm_client import LLMClient
from app.application.ports.persona_repository import PersonaRepository
from app.application.ports.session_record_repository import SessionRecordRepository
from app.application.use_cases.check_intent import CheckIntent
from app.application.use_cases.get_session_history import GetSessionHistory
from app.application.use_cases.stream_chat_use_case import StreamChatUseCase
from app.infrastructure.config.settings import settings


def create_persona_repository() -> PersonaRepository:
    """
    Factory function to create persona repository.

    Returns:
        PersonaRepository instance
    """
    if settings.persona_repository == "postgres":
        if not settings.database_url:
            raise ValueError("DATABASE_URL is required when PERSONA_REPOSITORY=postgres")
        return PostgresPersonaRepository()
    return StaticPersonaRepository()


def create_session_record_repository() -> SessionRecordRepository:
    """
    Factory function to create session record repository.

    Returns:
        SessionRecordRepository instance, wrapped with a Redis cache when enabled
    """
    if settings.session_record_repository != "postgres":
        return InMemorySessionRecordRepository()

    if not settings.database_url:
        raise ValueError("DATABASE_URL is required when SESSION_RECORD_REPOSITORY=postgres")
    repository: SessionRecordRepository = PostgresSessionRecordRepository()

    if settings.session_record_cache_enabled and settings.redis_url:
        cache = RedisSessionRecordCache(
            settings.redis_url,
            settings.session_record_cache_ttl_seconds,
        )
        repository = CachedSessionRecordRepository(repository, cache)
    return repository


def create_llm_client() -> LLMClient:
    """
    Factory function to create the LLM client for the configured provider.

    Returns:
        LLMClient instance

    Raises:
        ValueError: If the provider is unknown or its API key is missing
    """
    if settings.llm_provider == "gemini":
        from app.adapters.outbound.llm.gemini_llm_client import GeminiLLMClient

        return GeminiLLMClient()
    if settings.llm_provider == "openai":
        from app.adapters.outbound.llm.openai_llm_client import OpenAILLMClient

        return OpenAILLMClient()
    raise ValueError(f"Unknown LLM_PROVIDER: {settings.llm_provider}")


def create_intent_classifier(llm_client: LLMClient) -> CheckIntent:
    """
    Factory function to create the intent relevance gate.

    Args:
        llm_client: Backend used for the YES/NO classification

    Returns:
        CheckIntent instance using the configured temperature
    """
    return CheckIntent(llm_client, temperature=settings.intent_check_temperature)


def create_live_chat_context_cache() -> LiveChatContextCache:
    """
    Factory function to create live chat context cache.

    Returns:
        LiveChatContextCache instance
    """
    return InMemoryLiveChatContextCache(
        ttl_seconds=settings.live_context_ttl_seconds,
        max_sessions=settings.live_context_max_sessions,
    )


def create_stream_chat_use_case(
    record_repository: SessionRecordRepository,
) -> StreamChatUseCase:
    """
    Factory function to create StreamChatUseCase with dependencies.

    Args:
        record_repository: Record repository shared with history retrieval

    Returns:
        StreamChatUseCase instance
    """
    llm_client = create_llm_client()
    return StreamChatUseCase(
        persona_repository=create_persona_repository(),
        record_repository=record_repository,
        context_cache=create_live_chat_context_cache(),
        llm_client=llm_client,
        check_intent=create_intent_classifier(llm_client),
    )


def create_session_history_use_case(
    record_repository: SessionRecordRepository,
) -> GetSessionHistory:
    """
    Factory function to create GetSessionHistory.

    Args:
        record_repository: Record repository shared with streaming chat

    Returns:
        GetSessionHistory instance
    """
    return GetSessionHistory(record_repository)


@lru_cache
def get_session_record_repository() -> SessionRecordRepository:
    """Provide the process-wide session record repository."""
    return create_session_record_repository()


@lru_cache
def get_stream_chat_use_case() -> StreamChatUseCase:
    """Provide the process-wide streaming chat use case."""
    return create_stream_chat_use_case(get_session_record_repository())


@lru_cache
def get_session_history_use_case() -> GetSessionHistory:
    """Provide the process-wide history use case."""
    return create_session_history_use_case(get_session_record_repository())
