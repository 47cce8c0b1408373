"""Persona repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from app.domain.entities.persona_config import PersonaConfig


class PersonaRepository(ABC):
    """Port interface for consultant persona lookup."""

    @abstractmethod
    async def get(self, persona_id: str) -> Optional[PersonaConfig]:
        """
        Get a persona configuration by id.

        Args:
            persona_id: Consultant identifier

        Returns:
            Persona configuration, or None if not found
        """
        pass
