"""Session record (de)serialization shared by the persistent adapters."""

from datetime import datetime, timezone
from typing import Any, Optional

from app.domain.entities.session_record import ConversationTurn, SessionRecord, TurnRole


def _parse_datetime(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now(timezone.utc)
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    # SQLite and some clients drop the offset
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def serialize_turn(turn: ConversationTurn) -> dict[str, Any]:
    """Serialize a ConversationTurn to a JSON-compatible dictionary."""
    return {
        "role": turn.role.value,
        "text": turn.text,
        "timestamp": turn.timestamp.isoformat(),
    }


def deserialize_turn(data: dict[str, Any]) -> ConversationTurn:
    """Deserialize a dictionary to a ConversationTurn."""
    return ConversationTurn(
        role=TurnRole(data["role"]),
        text=data["text"],
        timestamp=_parse_datetime(data.get("timestamp")),
    )


def serialize_record(record: SessionRecord) -> dict[str, Any]:
    """
    Serialize SessionRecord to dictionary.

    Args:
        record: Session record entity

    Returns:
        Dictionary representation of the record
    """
    return {
        "session_id": record.session_id,
        "consultant_id": record.consultant_id,
        "history": [serialize_turn(turn) for turn in record.history],
        "created_at": record.created_at.isoformat() if record.created_at else None,
        "updated_at": record.updated_at.isoformat() if record.updated_at else None,
    }


def deserialize_record(data: dict[str, Any]) -> SessionRecord:
    """
    Deserialize dictionary to SessionRecord.

    Args:
        data: Dictionary representation of the record

    Returns:
        SessionRecord entity

    Raises:
        KeyError: If a required field is missing
        ValueError: If a role or timestamp is malformed
    """
    return SessionRecord(
        session_id=data["session_id"],
        consultant_id=data["consultant_id"],
        history=[deserialize_turn(turn) for turn in data.get("history") or []],
        created_at=_parse_datetime(data.get("created_at")),
        updated_at=_parse_datetime(data.get("updated_at")),
    )
