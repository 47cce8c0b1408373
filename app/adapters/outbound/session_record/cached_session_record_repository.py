"""Cached session record repository with cache-aside pattern."""

from typing import Optional

from app.application.ports.session_record_repository import SessionRecordRepository
from app.domain.entities.session_record import SessionRecord
from app.infrastructure.logging.logger import log_turn

from .redis_session_record_cache import RedisSessionRecordCache


class CachedSessionRecordRepository(SessionRecordRepository):
    """Session record repository with Redis cache (cache-aside pattern)."""

    def __init__(
        self,
        primary_repository: SessionRecordRepository,
        cache: RedisSessionRecordCache,
    ) -> None:
        """
        Initialize cached repository.

        Args:
            primary_repository: Primary repository (Postgres) - source of truth
            cache: Redis cache for records
        """
        self._primary = primary_repository
        self._cache = cache

    async def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get session record (cache-aside pattern).

        Args:
            session_id: Session identifier

        Returns:
            Session record, or None if not found
        """
        cached_record = await self._cache.get(session_id)
        log_turn(
            session_id=session_id,
            turn_id="cache",
            component="record_cache",
            record_cache_hit=cached_record is not None,
        )
        if cached_record is not None:
            return cached_record

        record = await self._primary.get(session_id)
        if record is not None:
            await self._cache.set(record)
        return record

    async def save(self, record: SessionRecord) -> None:
        """
        Save session record to the primary repository, then refresh the cache.

        The cache entry is dropped first so a failed primary write never leaves
        a newer record in the cache than in the source of truth.

        Args:
            record: Session record to save
        """
        await self._cache.delete(record.session_id)
        await self._primary.save(record)
        await self._cache.set(record)

    async def list(self) -> list[SessionRecord]:
        """
        List all records from the primary repository.

        Returns:
            Records ordered by updated_at, most recent first
        """
        return await self._primary.list()
