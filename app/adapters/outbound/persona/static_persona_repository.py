"""Static (in-process) persona repository adapter."""

from collections.abc import Iterable
from typing import Optional

from app.adapters.outbound.persona.default_personas import DEFAULT_PERSONAS
from app.application.ports.persona_repository import PersonaRepository
from app.domain.entities.persona_config import PersonaConfig


class StaticPersonaRepository(PersonaRepository):
    """Persona repository backed by a fixed set of configurations."""

    def __init__(self, personas: Optional[Iterable[PersonaConfig]] = None) -> None:
        """
        Initialize static repository.

        Args:
            personas: Personas to serve (defaults to the built-in consultants)
        """
        source = DEFAULT_PERSONAS if personas is None else personas
        self._personas: dict[str, PersonaConfig] = {persona.id: persona for persona in source}

    async def get(self, persona_id: str) -> Optional[PersonaConfig]:
        """
        Get a persona configuration by id.

        Args:
            persona_id: Consultant identifier

        Returns:
            Persona configuration, or None if not found
        """
        return self._personas.get(persona_id)
