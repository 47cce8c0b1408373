"""SQLAlchemy ORM models for consultant configurations."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text

from app.infrastructure.db import Base


class ConsultantConfigModel(Base):
    """SQLAlchemy model for consultant_configs table."""

    __tablename__ = "consultant_configs"

    consultant_id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    system_instruction = Column(Text, nullable=False)
    topic_scope = Column(JSON, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
