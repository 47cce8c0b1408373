"""LLM client port interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator

from app.domain.entities.live_chat_context import LiveChatContext


class LLMClient(ABC):
    """Port interface for the text generation backend."""

    @abstractmethod
    async def generate(self, instruction: str, temperature: float) -> str:
        """
        Generate a single-shot completion.

        Args:
            instruction: Full instruction text
            temperature: Sampling temperature

        Returns:
            Generated text

        Raises:
            LLMClientError: If the call fails or returns an empty response
        """
        pass

    @abstractmethod
    def stream_reply(self, context: LiveChatContext, prompt: str) -> AsyncIterator[str]:
        """
        Stream a reply to a prompt, primed with the live chat context.

        The returned iterator is finite and forward-only. Closing it releases
        the underlying backend stream.

        Args:
            context: Live chat context (system instruction and prior turns)
            prompt: User prompt

        Returns:
            Async iterator of text fragments in production order

        Raises:
            LLMClientError: If the backend fails before or during streaming
        """
        pass
