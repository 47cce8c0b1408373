"""Unit tests for GetSessionHistory."""

from datetime import datetime, timedelta, timezone

import pytest

from app.adapters.outbound.session_record.in_memory_session_record_repository import (
    InMemorySessionRecordRepository,
)
from app.application.use_cases.get_session_history import GetSessionHistory
from app.domain.entities.session_record import SessionRecord, TurnRole
from app.domain.errors import InvalidChatRequestError, SessionRecordNotFoundError


@pytest.fixture
def repository():
    return InMemorySessionRecordRepository()


@pytest.fixture
def use_case(repository):
    return GetSessionHistory(repository)


async def save_record(repository, session_id, prompts, updated_at=None):
    record = SessionRecord(session_id=session_id, consultant_id="financial_advisor")
    for prompt in prompts:
        record.append_turn(TurnRole.USER, prompt)
        record.append_turn(TurnRole.MODEL, f"answer to {prompt}")
    if updated_at is not None:
        record.updated_at = updated_at
    await repository.save(record)
    return record


@pytest.mark.asyncio
async def test_execute_returns_turns_in_order(use_case, repository):
    """Test history is returned with role, content and timestamp in stored order."""
    record = await save_record(repository, "s1", ["退休金規劃"])

    history = await use_case.execute("s1")

    assert history.session_id == "s1"
    assert history.consultant_id == "financial_advisor"
    assert [(turn.role, turn.content) for turn in history.history] == [
        ("user", "退休金規劃"),
        ("model", "answer to 退休金規劃"),
    ]
    assert history.history[0].timestamp == record.history[0].timestamp.isoformat()
    assert history.last_updated == record.updated_at.isoformat()


@pytest.mark.asyncio
async def test_execute_serializes_with_camel_case(use_case, repository):
    """Test history serializes with the client's field names."""
    await save_record(repository, "s1", ["hi"])

    payload = (await use_case.execute("s1")).model_dump(by_alias=True)

    assert set(payload) == {"sessionId", "consultantId", "history", "lastUpdated"}


@pytest.mark.asyncio
@pytest.mark.parametrize("session_id", ["", "   "])
async def test_execute_requires_session_id(use_case, session_id):
    """Test an empty sessionId is a client error."""
    with pytest.raises(InvalidChatRequestError) as exc_info:
        await use_case.execute(session_id)

    assert exc_info.value.status_code == 400
    assert "sessionId" in exc_info.value.message


@pytest.mark.asyncio
async def test_execute_unknown_session(use_case):
    """Test an unknown session is not found."""
    with pytest.raises(SessionRecordNotFoundError) as exc_info:
        await use_case.execute("missing")

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_records_labels_and_orders(use_case, repository):
    """Test records are listed newest first, labelled by their first prompt."""
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    await save_record(repository, "old", ["短問題"], updated_at=base)
    await save_record(
        repository,
        "new",
        ["這是一個非常長的問題，用來測試標籤截斷的行為", "第二個問題"],
        updated_at=base + timedelta(hours=1),
    )
    await save_record(repository, "empty", [], updated_at=base - timedelta(hours=1))

    result = await use_case.list_records()

    assert result.total_records == 3
    assert [summary.value for summary in result.records] == ["new", "old", "empty"]
    assert result.records[0].label == "這是一個非常長的問題，用來測試"
    assert len(result.records[0].label) == 15
    assert result.records[1].label == "短問題"
    assert result.records[2].label is None


@pytest.mark.asyncio
async def test_list_records_empty(use_case):
    """Test an empty store lists nothing."""
    result = await use_case.list_records()

    assert result.total_records == 0
    assert result.records == []
