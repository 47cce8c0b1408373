"""Conversation history DTOs."""

from typing import Optional

from pydantic import Field

from app.application.dtos.base import DTO


class HistoryRequest(DTO):
    """Request for one session's history."""

    session_id: Optional[str] = Field(default=None, alias="sessionId")


class HistoryTurn(DTO):
    """One persisted turn as returned to clients."""

    role: str
    content: str
    timestamp: str


class SessionHistory(DTO):
    """Full persisted history of a session."""

    session_id: str = Field(alias="sessionId")
    consultant_id: str = Field(alias="consultantId")
    history: list[HistoryTurn]
    last_updated: str = Field(alias="lastUpdated")


class SessionRecordSummary(DTO):
    """Session entry for record listings."""

    label: Optional[str] = None
    value: str


class SessionRecordList(DTO):
    """All persisted sessions."""

    total_records: int = Field(alias="totalRecords")
    records: list[SessionRecordSummary]
