"""OpenAI LLM client adapter."""

from collections.abc import AsyncIterator
from typing import Optional

import httpx
from openai import AsyncOpenAI

from app.application.ports.llm_client import LLMClient
from app.domain.entities.live_chat_context import LiveChatContext
from app.domain.entities.session_record import TurnRole
from app.domain.errors import LLMClientError
from app.infrastructure.config.settings import settings

_ROLE_MAP = {
    TurnRole.USER: "user",
    TurnRole.MODEL: "assistant",
}


class OpenAILLMClient(LLMClient):
    """OpenAI LLM client implementation using official SDK."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        """
        Initialize OpenAI LLM client.

        Args:
            api_key: OpenAI API key (defaults to settings.openai_api_key)
            model: Model name (defaults to settings.openai_model)
            timeout_seconds: Request timeout in seconds (defaults to settings.openai_timeout_seconds)
            http_client: HTTP client for the SDK (defaults to the SDK's own)
        """
        self._api_key = api_key or settings.openai_api_key
        self._model = model or settings.openai_model
        self._timeout = timeout_seconds or settings.openai_timeout_seconds

        if not self._api_key:
            raise ValueError("OpenAI API key is required")

        self._client = AsyncOpenAI(
            api_key=self._api_key,
            timeout=self._timeout,
            max_retries=0,  # A failed generation is reported, never re-sent
            http_client=http_client,
        )

    def _build_messages(self, context: LiveChatContext, prompt: str) -> list[dict[str, str]]:
        """
        Build chat messages from the live context and the new prompt.

        Args:
            context: Live chat context
            prompt: User prompt

        Returns:
            Messages in stored turn order, framed by system instruction and prompt
        """
        messages = [{"role": "system", "content": context.system_instruction}]
        messages.extend(
            {"role": _ROLE_MAP[turn.role], "content": turn.text} for turn in context.turns
        )
        messages.append({"role": "user", "content": prompt})
        return messages

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
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": instruction}],
                temperature=temperature,
            )
        except Exception as e:
            raise LLMClientError(f"OpenAI API call failed: {str(e)}") from e

        if not response.choices or response.choices[0].message.content is None:
            raise LLMClientError("Empty response from OpenAI API")

        return response.choices[0].message.content

    async def stream_reply(self, context: LiveChatContext, prompt: str) -> AsyncIterator[str]:
        """
        Stream a reply using chat completions with stream=True.

        Args:
            context: Live chat context
            prompt: User prompt

        Yields:
            Non-empty text fragments in arrival order

        Raises:
            LLMClientError: If the API call or the stream fails
        """
        try:
            stream = await self._client.chat.completions.create(
                model=self._model,
                messages=self._build_messages(context, prompt),
                stream=True,
            )
        except Exception as e:
            raise LLMClientError(f"OpenAI API call failed: {str(e)}") from e

        try:
            async for chunk in stream:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except Exception as e:
            raise LLMClientError(f"OpenAI stream failed: {str(e)}") from e
        finally:
            await stream.close()
