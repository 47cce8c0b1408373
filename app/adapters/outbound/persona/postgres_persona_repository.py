"""Postgres-backed persona repository adapter."""

from collections.abc import Callable
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.ports.persona_repository import PersonaRepository
from app.domain.entities.persona_config import PersonaConfig
from app.infrastructure.db import run_in_db_session
from app.infrastructure.logging.logger import logger

from .models import ConsultantConfigModel


class PostgresPersonaRepository(PersonaRepository):
    """Postgres implementation of persona repository."""

    def __init__(self, session_factory: Optional[Callable[[], Session]] = None) -> None:
        """
        Initialize Postgres repository.

        Args:
            session_factory: Session factory (defaults to the application engine)
        """
        self._session_factory = session_factory

    def _model_to_entity(self, model: ConsultantConfigModel) -> PersonaConfig:
        """
        Convert ConsultantConfigModel to PersonaConfig.

        Args:
            model: SQLAlchemy model instance

        Returns:
            PersonaConfig entity
        """
        return PersonaConfig(
            id=model.consultant_id,
            name=model.name,
            system_instruction=model.system_instruction,
            topic_scope=list(model.topic_scope or []),
            is_active=bool(model.is_active),
        )

    async def get(self, persona_id: str) -> Optional[PersonaConfig]:
        """
        Get a persona configuration by id.

        Args:
            persona_id: Consultant identifier

        Returns:
            Persona configuration, or None if not found
        """

        def _get(db: Session) -> Optional[PersonaConfig]:
            model = (
                db.query(ConsultantConfigModel)
                .filter(ConsultantConfigModel.consultant_id == persona_id)
                .first()
            )
            return self._model_to_entity(model) if model is not None else None

        try:
            return await run_in_db_session(_get, self._session_factory)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting consultant {persona_id}: {str(e)}")
            raise
