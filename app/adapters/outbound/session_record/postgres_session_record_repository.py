"""Postgres-backed session record repository adapter."""

from collections.abc import Callable
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.ports.session_record_repository import SessionRecordRepository
from app.domain.entities.session_record import SessionRecord
from app.infrastructure.db import run_in_db_session
from app.infrastructure.logging.logger import logger

from .models import ChatRecordModel
from .serialization import deserialize_turn, serialize_turn


def _aware(value: Optional[datetime]) -> datetime:
    # SQLite returns naive datetimes
    if value is None:
        return datetime.now(timezone.utc)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostgresSessionRecordRepository(SessionRecordRepository):
    """Postgres implementation of session record repository."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        """
        Initialize Postgres repository.

        Args:
            session_factory: Session factory (defaults to the application engine)
        """
        self._session_factory = session_factory

    def _model_to_entity(self, model: ChatRecordModel) -> SessionRecord:
        """
        Convert ChatRecordModel to SessionRecord.

        Args:
            model: SQLAlchemy model instance

        Returns:
            SessionRecord entity
        """
        return SessionRecord(
            session_id=model.session_id,
            consultant_id=model.consultant_id,
            history=[deserialize_turn(turn) for turn in model.history or []],
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    async def get(self, session_id: str) -> Optional[SessionRecord]:
        """
        Get the record for a session.

        Args:
            session_id: Session identifier

        Returns:
            Session record, or None if not found
        """

        def _get(db: Session) -> Optional[SessionRecord]:
            model = (
                db.query(ChatRecordModel).filter(ChatRecordModel.session_id == session_id).first()
            )
            return self._model_to_entity(model) if model is not None else None

        try:
            return await run_in_db_session(_get, self._session_factory)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting record for session {session_id}: {str(e)}")
            raise
        except (KeyError, ValueError) as e:
            logger.error(f"Error deserializing record for session {session_id}: {str(e)}")
            raise

    async def save(self, record: SessionRecord) -> None:
        """
        Save a session record (upsert).

        Args:
            record: Session record to save
        """
        history = [serialize_turn(turn) for turn in record.history]

        def _save(db: Session) -> None:
            model = (
                db.query(ChatRecordModel)
                .filter(ChatRecordModel.session_id == record.session_id)
                .first()
            )
            if model:
                model.consultant_id = record.consultant_id
                model.history = history
                model.updated_at = record.updated_at
            else:
                model = ChatRecordModel(
                    session_id=record.session_id,
                    consultant_id=record.consultant_id,
                    history=history,
                    created_at=record.created_at,
                    updated_at=record.updated_at,
                )
                db.add(model)

        try:
            await run_in_db_session(_save, self._session_factory)
        except SQLAlchemyError as e:
            logger.error(
                f"Database error while saving record for session {record.session_id}: {str(e)}"
            )
            raise

    async def list(self) -> list[SessionRecord]:
        """
        List all records.

        Returns:
            Records ordered by updated_at, most recent first
        """

        def _list(db: Session) -> list[SessionRecord]:
            models = db.query(ChatRecordModel).order_by(ChatRecordModel.updated_at.desc()).all()
            return [self._model_to_entity(model) for model in models]

        try:
            return await run_in_db_session(_list, self._session_factory)
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing records: {str(e)}")
            raise
