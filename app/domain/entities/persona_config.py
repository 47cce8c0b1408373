"""Persona (consultant) configuration entity."""

from pydantic import BaseModel, ConfigDict, Field


class PersonaConfig(BaseModel):
    """Consultant persona configuration."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str
    name: str
    system_instruction: str
    topic_scope: list[str] = Field(default_factory=list)
    is_active: bool = True
