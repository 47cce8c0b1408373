"""Intent relevance check against a persona's topic scope."""

from typing import Optional

from app.application.ports.llm_client import LLMClient
from app.domain.entities.persona_config import PersonaConfig
from app.infrastructure.config.settings import settings
from app.infrastructure.logging.logger import logger

INTENT_INSTRUCTION_TEMPLATE = """你是一個問題分類系統。
用戶的問題是關於：「{prompt}」。
該問題的適用範圍是：{topic_scope}。

請嚴格回答一個單字：
- 如果問題與適用範圍「相關」，請回答：YES
- 如果問題與適用範圍「無關」，請回答：NO
不要回答任何其他內容。"""


class CheckIntent:
    """Decide whether a prompt is in scope for a persona.

    Any backend failure counts as relevant (fail open).
    """

    def __init__(self, llm_client: LLMClient, temperature: Optional[float] = None) -> None:
        """
        Initialize intent check.

        Args:
            llm_client: Generation backend used for classification
            temperature: Sampling temperature (defaults to settings.intent_check_temperature)
        """
        self._llm_client = llm_client
        self._temperature = (
            settings.intent_check_temperature if temperature is None else temperature
        )

    @staticmethod
    def build_instruction(persona: PersonaConfig, prompt: str) -> str:
        """
        Build the classification instruction.

        Args:
            persona: Persona whose topic scope is checked
            prompt: User prompt

        Returns:
            Instruction asking for a single YES/NO word
        """
        return INTENT_INSTRUCTION_TEMPLATE.format(
            prompt=prompt,
            topic_scope=", ".join(persona.topic_scope),
        )

    async def is_relevant(self, persona: PersonaConfig, prompt: str) -> bool:
        """
        Check prompt relevance.

        Args:
            persona: Persona the prompt is addressed to
            prompt: User prompt

        Returns:
            True if relevant or if the check could not be performed
        """
        instruction = self.build_instruction(persona, prompt)
        try:
            answer = await self._llm_client.generate(instruction, temperature=self._temperature)
            return answer.strip().upper() == "YES"
        except Exception as e:
            logger.warning(
                f"Intent check failed for consultant {persona.id}, allowing request: {str(e)}"
            )
            return True
