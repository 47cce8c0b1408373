"""Persona repository adapters."""

from app.adapters.outbound.persona.postgres_persona_repository import PostgresPersonaRepository
from app.adapters.outbound.persona.static_persona_repository import StaticPersonaRepository

__all__ = [
    "PostgresPersonaRepository",
    "StaticPersonaRepository",
]
