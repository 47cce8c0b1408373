"""In-memory session record repository adapter."""

import copy
from typing import Optional

from app.application.ports.session_record_repository import SessionRecordRepository
from app.domain.entities.session_record import SessionRecord


class InMemorySessionRecordRepository(SessionRecordRepository):
    """In-memory implementation of session record repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, SessionRecord] = {}

    async def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get the record for a session.

        Returns a copy, so unsaved changes made by callers never leak into storage.

        Args:
            session_id: Session identifier

        Returns:
            Session record, or None if not found
        """
        record = self._storage.get(session_id)
        return copy.deepcopy(record) if record is not None else None

    async def save(self, record: SessionRecord) -> None:
        """
        Save a session record.

        Args:
            record: Session record to save
        """
        self._storage[record.session_id] = copy.deepcopy(record)

    async def list(self) -> list[SessionRecord]:
        """
        List all records.

        Returns:
            Records ordered by updated_at, most recent first
        """
        records = sorted(self._storage.values(), key=lambda r: r.updated_at, reverse=True)
        return [copy.deepcopy(record) for record in records]
