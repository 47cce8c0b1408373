"""Redis cache adapter for session records."""

import json
from typing import Optional

from redis import asyncio as aioredis

from app.domain.entities.session_record import SessionRecord
from app.infrastructure.logging.logger import logger

from .serialization import deserialize_record, serialize_record


class RedisSessionRecordCache:
    """Redis cache for session records using cache-aside pattern."""

    KEY_PREFIX = "chat:record:"

    def __init__(self, redis_url: str, ttl_seconds: int) -> None:
        """
        Initialize Redis session record cache.

        Args:
            redis_url: Redis connection URL
            ttl_seconds: Time-to-live in seconds for cached records
        """
        self._redis_url = redis_url
        self._ttl_seconds = ttl_seconds
        self._client: Optional[aioredis.Redis] = None

    async def _get_client(self) -> aioredis.Redis:
        """
        Get or create Redis client.

        Returns:
            Redis client instance
        """
        if self._client is None:
            self._client = await aioredis.from_url(
                self._redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    def _make_key(self, session_id: str) -> str:
        return f"{self.KEY_PREFIX}{session_id}"

    async def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get session record from cache.

        Args:
            session_id: Session identifier

        Returns:
            Session record, or None if not cached or unreadable
        """
        try:
            client = await self._get_client()
            cached_data = await client.get(self._make_key(session_id))

            if cached_data is None:
                return None

            return deserialize_record(json.loads(cached_data))
        except Exception as e:
            # Treat as cache miss
            logger.warning(f"Error reading from cache for session {session_id}: {str(e)}")
            return None

    async def set(self, record: SessionRecord) -> None:
        """
        Store session record in cache with TTL.

        Args:
            record: Session record to cache
        """
        try:
            client = await self._get_client()
            record_json = json.dumps(serialize_record(record), sort_keys=True, ensure_ascii=False)
            await client.setex(self._make_key(record.session_id), self._ttl_seconds, record_json)
        except Exception as e:
            # Cache write failure is non-critical
            logger.warning(f"Error writing to cache for session {record.session_id}: {str(e)}")

    async def delete(self, session_id: str) -> None:
        """
        Delete session record from cache.

        Args:
            session_id: Session identifier
        """
        try:
            client = await self._get_client()
            await client.delete(self._make_key(session_id))
        except Exception as e:
            logger.warning(f"Error deleting from cache for session {session_id}: {str(e)}")

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
