"""SQLAlchemy ORM models for chat records."""

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, String

from app.infrastructure.db import Base


class ChatRecordModel(Base):
    """SQLAlchemy model for chat_records table."""

    __tablename__ = "chat_records"

    session_id = Column(String, primary_key=True, index=True)
    consultant_id = Column(String, nullable=False)
    history = Column(JSON, nullable=False, default=list)
    created_at = Column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
