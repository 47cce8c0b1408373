"""Traditional Chinese user-facing messages for the consultant gateway."""

from app.domain.entities.persona_config import PersonaConfig


class ConsultantMessagesZH:
    """Centralized Traditional Chinese user-facing messages."""

    STREAM_COMPLETED = "串流完成，紀錄已儲存"
    PERSISTENCE_FAILED = "回覆已完成，但對話紀錄儲存失敗，下次可能無法延續本次對話。"
    UNEXPECTED_ERROR = "伺服器處理錯誤：發生未預期的錯誤，請稍後再試。"

    @staticmethod
    def missing_fields(fields: list[str]) -> str:
        """Generate the client error for missing request fields."""
        return f"錯誤: 缺少 {', '.join(fields)}。"

    @staticmethod
    def off_topic(persona: PersonaConfig) -> str:
        """Generate the intent-gate rejection for a persona."""
        scope = "、".join(persona.topic_scope)
        return (
            f"對不起，我是{persona.name}。您的問題似乎與我的專業領域（{scope}）無關。"
            f"請針對{persona.name}的服務範圍提問，或切換至其他顧問。"
        )

    @staticmethod
    def stream_failed(error_type: str) -> str:
        """Generate the streaming error message, naming only the error class."""
        return f"伺服器處理錯誤：生成服務發生錯誤（{error_type}），請稍後再試。"
