"""Session record repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.session_record import SessionRecord


class SessionRecordRepository(ABC):
    """Port interface for durable conversation history."""

    @abstractmethod
    async def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get the record for a session.

        Args:
            session_id: Session identifier

        Returns:
            Session record, or None if not found
        """
        pass

    async def create(self, session_id: str, consultant_id: str) -> SessionRecord:
        """
        Create a new, not yet saved, record.

        Args:
            session_id: Session identifier
            consultant_id: Consultant bound to the session

        Returns:
            Empty session record
        """
        return SessionRecord(session_id=session_id, consultant_id=consultant_id)

    @abstractmethod
    async def save(self, record: SessionRecord) -> None:
        """
        Save a session record, inserting or replacing it.

        Args:
            record: Session record to save
        """
        pass

    @abstractmethod
    async def list(self) -> list[SessionRecord]:
        """
        List all records.

        Returns:
            Records ordered by updated_at, most recent first
        """
        pass
