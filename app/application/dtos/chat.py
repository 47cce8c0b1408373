"""Chat streaming DTOs."""

from enum import Enum
from typing import Optional

from pydantic import ConfigDict, Field

from app.application.dtos.base import DTO


class StreamChatRequest(DTO):
    """Inbound streaming chat request."""

    prompt: Optional[str] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    consultant_id: Optional[str] = Field(default=None, alias="consultantId")

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "prompt": "What ETFs suit retirement?",
                "sessionId": "s1",
                "consultantId": "financial_advisor",
            }
        },
    )

    def missing_fields(self) -> list[str]:
        """
        List required fields that are empty.

        Returns:
            Wire names of the fields that are null, empty or whitespace only
        """
        fields = {
            "prompt": self.prompt,
            "sessionId": self.session_id,
            "consultantId": self.consultant_id,
        }
        return [name for name, value in fields.items() if value is None or not value.strip()]


class StreamEventType(str, Enum):
    """Kind of event written to the stream."""

    TEXT = "text"
    FINAL = "final"
    ERROR = "error"


class StreamEvent(DTO):
    """Single event of the streaming response."""

    type: StreamEventType
    content: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def text(cls, content: str) -> "StreamEvent":
        """Build a text fragment event."""
        return cls(type=StreamEventType.TEXT, content=content)

    @classmethod
    def final(cls, message: str) -> "StreamEvent":
        """Build a completion event."""
        return cls(type=StreamEventType.FINAL, message=message)

    @classmethod
    def error(cls, message: str) -> "StreamEvent":
        """Build an error or rejection event."""
        return cls(type=StreamEventType.ERROR, message=message)

    def to_payload(self) -> dict[str, str]:
        """
        Convert the event to its wire payload.

        Returns:
            Dictionary with "type" and either "content" or "message"
        """
        payload = {"type": self.type.value}
        if self.type == StreamEventType.TEXT:
            payload["content"] = self.content or ""
        else:
            payload["message"] = self.message or ""
        return payload
