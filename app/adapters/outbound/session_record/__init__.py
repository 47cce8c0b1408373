"""Session record repository adapters."""

from app.adapters.outbound.session_record.cached_session_record_repository import (
    CachedSessionRecordRepository,
)
from app.adapters.outbound.session_record.in_memory_session_record_repository import (
    InMemorySessionRecordRepository,
)
from app.adapters.outbound.session_record.postgres_session_record_repository import (
    PostgresSessionRecordRepository,
)
from app.adapters.outbound.session_record.redis_session_record_cache import (
    RedisSessionRecordCache,
)

__all__ = [
    "CachedSessionRecordRepository",
    "InMemorySessionRecordRepository",
    "PostgresSessionRecordRepository",
    "RedisSessionRecordCache",
]
