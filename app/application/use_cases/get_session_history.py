"""Session history retrieval use cases."""

from typing import Optional

from app.application.dtos.history import (
    HistoryTurn,
    SessionHistory,
    SessionRecordList,
    SessionRecordSummary,
)
from app.application.ports.session_record_repository import SessionRecordRepository
from app.domain.entities.session_record import SessionRecord
from app.domain.errors import InvalidChatRequestError, SessionRecordNotFoundError

# Length of the first user prompt used to label a session in listings
RECORD_LABEL_LENGTH = 15


class GetSessionHistory:
    """Read persisted conversation history."""

    def __init__(self, record_repository: SessionRecordRepository) -> None:
        """
        Initialize history use case.

        Args:
            record_repository: Durable conversation history
        """
        self._record_repository = record_repository

    async def execute(self, session_id: Optional[str]) -> SessionHistory:
        """
        Get the full history of a session.

        Args:
            session_id: Session identifier

        Returns:
            Session history with role, content and timestamp per turn

        Raises:
            InvalidChatRequestError: If session_id is empty
            SessionRecordNotFoundError: If the session has no record
        """
        if not session_id or not session_id.strip():
            raise InvalidChatRequestError("錯誤：缺少 sessionId 參數")

        record = await self._record_repository.get(session_id)
        if record is None:
            raise SessionRecordNotFoundError(session_id)

        return SessionHistory(
            session_id=record.session_id,
            consultant_id=record.consultant_id,
            history=[
                HistoryTurn(
                    role=turn.role.value,
                    content=turn.text,
                    timestamp=turn.timestamp.isoformat(),
                )
                for turn in record.history
            ],
            last_updated=record.updated_at.isoformat(),
        )

    async def list_records(self) -> SessionRecordList:
        """
        List every persisted session, most recently updated first.

        Returns:
            Sessions labelled by the start of their first user prompt
        """
        records = await self._record_repository.list()
        return SessionRecordList(
            total_records=len(records),
            records=[self._summarize(record) for record in records],
        )

    @staticmethod
    def _summarize(record: SessionRecord) -> SessionRecordSummary:
        first_prompt = record.first_user_text()
        label = first_prompt[:RECORD_LABEL_LENGTH] if first_prompt is not None else None
        return SessionRecordSummary(label=label, value=record.session_id)
