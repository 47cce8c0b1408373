"""Unit tests for cached session record repository."""

from unittest.mock import AsyncMock, Mock, call

import pytest

from app.adapters.outbound.session_record.cached_session_record_repository import (
    CachedSessionRecordRepository,
)
from app.adapters.outbound.session_record.redis_session_record_cache import (
    RedisSessionRecordCache,
)
from app.application.ports.session_record_repository import SessionRecordRepository
from app.domain.entities.session_record import SessionRecord, TurnRole


@pytest.fixture
def mock_primary_repository():
    """Create a mock primary repository."""
    repo = AsyncMock(spec=SessionRecordRepository)
    repo.get = AsyncMock(return_value=None)
    repo.save = AsyncMock()
    repo.list = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def mock_cache():
    """Create a mock cache."""
    cache = AsyncMock(spec=RedisSessionRecordCache)
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    cache.delete = AsyncMock()
    return cache


@pytest.fixture
def sample_record():
    """Create a sample session record."""
    record = SessionRecord(session_id="test_session", consultant_id="insurance_advisor")
    record.append_turn(TurnRole.USER, "醫療險怎麼理賠？")
    return record


@pytest.fixture
def cached_repository(mock_primary_repository, mock_cache):
    """Create cached repository with mocked dependencies."""
    return CachedSessionRecordRepository(mock_primary_repository, mock_cache)


@pytest.mark.asyncio
async def test_get_cache_hit_returns_cached_record(
    cached_repository, mock_primary_repository, mock_cache, sample_record
):
    """Test get returns cached record on cache hit without querying primary."""
    mock_cache.get.return_value = sample_record

    result = await cached_repository.get("test_session")

    assert result == sample_record
    mock_cache.get.assert_called_once_with("test_session")
    mock_primary_repository.get.assert_not_called()


@pytest.mark.asyncio
async def test_get_cache_miss_loads_from_primary_and_populates_cache(
    cached_repository, mock_primary_repository, mock_cache, sample_record
):
    """Test get loads from primary on cache miss and populates cache."""
    mock_primary_repository.get.return_value = sample_record

    result = await cached_repository.get("test_session")

    assert result == sample_record
    mock_primary_repository.get.assert_called_once_with("test_session")
    mock_cache.set.assert_called_once_with(sample_record)


@pytest.mark.asyncio
async def test_get_missing_everywhere_does_not_populate_cache(
    cached_repository, mock_primary_repository, mock_cache
):
    """Test get returns None and skips the cache write when no record exists."""
    result = await cached_repository.get("unknown")

    assert result is None
    mock_cache.set.assert_not_called()


@pytest.mark.asyncio
async def test_save_invalidates_then_writes_primary_then_cache(
    cached_repository, mock_primary_repository, mock_cache, sample_record
):
    """Test save drops the cache entry, writes primary, then refreshes the cache."""
    order = Mock()
    order.attach_mock(mock_cache.delete, "delete")
    order.attach_mock(mock_primary_repository.save, "save")
    order.attach_mock(mock_cache.set, "set")

    await cached_repository.save(sample_record)

    assert order.mock_calls == [
        call.delete("test_session"),
        call.save(sample_record),
        call.set(sample_record),
    ]


@pytest.mark.asyncio
async def test_save_primary_failure_leaves_cache_empty(
    cached_repository, mock_primary_repository, mock_cache, sample_record
):
    """Test a failing primary write propagates and never repopulates the cache."""
    mock_primary_repository.save.side_effect = RuntimeError("db down")

    with pytest.raises(RuntimeError):
        await cached_repository.save(sample_record)

    mock_cache.delete.assert_called_once_with("test_session")
    mock_cache.set.assert_not_called()


@pytest.mark.asyncio
async def test_list_delegates_to_primary(
    cached_repository, mock_primary_repository, mock_cache, sample_record
):
    """Test list always reads from the primary repository."""
    mock_primary_repository.list.return_value = [sample_record]

    result = await cached_repository.list()

    assert result == [sample_record]
    mock_cache.get.assert_not_called()
