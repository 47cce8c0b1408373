"""Domain errors."""


class ConsultantGatewayError(Exception):
    """Base error for the consultant gateway."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        """
        Initialize error.

        Args:
            message: Human-readable message safe to return to clients
        """
        super().__init__(message)
        self.message = message


class InvalidChatRequestError(ConsultantGatewayError):
    """Raised when a chat request misses a required field."""

    status_code = 400


class PersonaNotFoundError(ConsultantGatewayError):
    """Raised when no consultant configuration matches the requested id."""

    status_code = 404

    def __init__(self, consultant_id: str) -> None:
        super().__init__(f"錯誤: 找不到顧問 ID: {consultant_id}")
        self.consultant_id = consultant_id


class SessionRecordNotFoundError(ConsultantGatewayError):
    """Raised when a session has no persisted conversation record."""

    status_code = 404

    def __init__(self, session_id: str) -> None:
        super().__init__("找不到該 Session 的對話紀錄")
        self.session_id = session_id


class LLMClientError(ConsultantGatewayError):
    """Raised by LLM adapters when the generation backend fails."""

    status_code = 502
