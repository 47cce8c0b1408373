"""Unit tests for persona repositories."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.adapters.outbound.persona import PostgresPersonaRepository, StaticPersonaRepository
from app.adapters.outbound.persona.default_personas import DEFAULT_PERSONAS
from app.adapters.outbound.persona.models import ConsultantConfigModel
from app.domain.entities.persona_config import PersonaConfig
from app.infrastructure.db import Base


@pytest.fixture
def session_factory():
    """Create a session factory bound to a SQLite in-memory database."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.mark.asyncio
@pytest.mark.parametrize("persona", DEFAULT_PERSONAS, ids=lambda p: p.id)
async def test_static_repository_serves_default_personas(persona):
    """Test every built-in consultant can be resolved by id."""
    repository = StaticPersonaRepository()

    result = await repository.get(persona.id)

    assert result == persona
    assert result.topic_scope


@pytest.mark.asyncio
async def test_static_repository_unknown_id():
    """Test an unknown id resolves to None."""
    assert await StaticPersonaRepository().get("unknown") is None


@pytest.mark.asyncio
async def test_static_repository_custom_personas():
    """Test a custom persona set replaces the built-in one."""
    custom = PersonaConfig(
        id="tax_expert",
        name="稅務專家",
        system_instruction="你是稅務專家。",
        topic_scope=["所得稅"],
    )
    repository = StaticPersonaRepository([custom])

    assert await repository.get("tax_expert") == custom
    assert await repository.get("financial_advisor") is None


@pytest.mark.asyncio
async def test_postgres_repository_get(session_factory):
    """Test a stored consultant row maps to a PersonaConfig."""
    db = session_factory()
    db.add(
        ConsultantConfigModel(
            consultant_id="financial_advisor",
            name="財務顧問",
            system_instruction="你是財務顧問。",
            topic_scope=["退休金規劃", "資產配置"],
            is_active=False,
        )
    )
    db.commit()
    db.close()

    result = await PostgresPersonaRepository(session_factory=session_factory).get(
        "financial_advisor"
    )

    assert result is not None
    assert result.name == "財務顧問"
    assert result.topic_scope == ["退休金規劃", "資產配置"]
    # Carried through without filtering
    assert result.is_active is False


@pytest.mark.asyncio
async def test_postgres_repository_unknown_id(session_factory):
    """Test an unknown id resolves to None."""
    result = await PostgresPersonaRepository(session_factory=session_factory).get("unknown")

    assert result is None
