"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Configure root logger with JSON-like structured format
_logger = logging.getLogger("consultant_stream_gateway")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_turn(
    session_id: str,
    turn_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for a chat turn.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier (UUID string)
        component: Component name (e.g., 'http', 'orchestrator', 'intent')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "session_id": session_id,
        "turn_id": turn_id,
        "component": component,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_intent_check(
    session_id: str,
    turn_id: str,
    consultant_id: str,
    relevant: bool,
    **kwargs: Any,
) -> None:
    """
    Log intent gate outcome.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier
        consultant_id: Consultant the prompt was checked against
        relevant: Whether the prompt was judged in scope
        **kwargs: Additional fields
    """
    log_turn(
        session_id=session_id,
        turn_id=turn_id,
        component="intent",
        consultant_id=consultant_id,
        intent_relevant=relevant,
        **kwargs,
    )


def log_context_prepared(
    session_id: str,
    turn_id: str,
    consultant_id: str,
    rebuilt: bool,
    history_length: int,
    previous_consultant_id: Optional[str] = None,
    **kwargs: Any,
) -> None:
    """
    Log live context preparation.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier
        consultant_id: Consultant bound to the context
        rebuilt: Whether the context was rebuilt from persisted history
        history_length: Number of persisted turns before this request
        previous_consultant_id: Consultant bound before a persona switch
        **kwargs: Additional fields
    """
    fields: dict[str, Any] = {
        "consultant_id": consultant_id,
        "context_rebuilt": rebuilt,
        "history_length": history_length,
    }
    if previous_consultant_id is not None:
        fields["previous_consultant_id"] = previous_consultant_id
    fields.update(kwargs)

    log_turn(
        session_id=session_id,
        turn_id=turn_id,
        component="context",
        **fields,
    )


def log_stream_result(
    session_id: str,
    turn_id: str,
    outcome: str,
    fragments_count: int,
    reply_length: int,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log the end of a streamed reply.

    Args:
        session_id: Session identifier
        turn_id: Turn identifier
        outcome: One of 'completed', 'rejected', 'error', 'cancelled'
        fragments_count: Number of text fragments forwarded
        reply_length: Length of the accumulated reply
        level: Log level (default: INFO)
        **kwargs: Additional fields
    """
    log_turn(
        session_id=session_id,
        turn_id=turn_id,
        component="stream",
        level=level,
        stream_outcome=outcome,
        fragments_count=fragments_count,
        reply_length=reply_length,
        **kwargs,
    )


# Export logger instance for module-level warnings and errors
logger = _logger
