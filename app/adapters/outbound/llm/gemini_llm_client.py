"""Gemini LLM client adapter."""

from collections.abc import AsyncIterator
from typing import Optional

from google import genai
from google.genai import types

from app.application.ports.llm_client import LLMClient
from app.domain.entities.live_chat_context import LiveChatContext
from app.domain.errors import LLMClientError
from app.infrastructure.config.settings import settings


class GeminiLLMClient(LLMClient):
    """Gemini LLM client implementation using the google-genai SDK."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None) -> None:
        """
        Initialize Gemini LLM client.

        Args:
            api_key: Gemini API key (defaults to settings.gemini_api_key)
            model: Model name (defaults to settings.gemini_model)
        """
        self._api_key = api_key or settings.gemini_api_key
        self._model = model or settings.gemini_model

        if not self._api_key:
            raise ValueError("Gemini API key is required")

        self._client = genai.Client(api_key=self._api_key)

    def _build_contents(self, context: LiveChatContext, prompt: str) -> list[types.Content]:
        """
        Build Gemini contents from the live context and the new prompt.

        Args:
            context: Live chat context
            prompt: User prompt

        Returns:
            Contents in stored turn order followed by the prompt
        """
        contents = [
            types.Content(role=turn.role.value, parts=[types.Part(text=turn.text)])
            for turn in context.turns
        ]
        contents.append(types.Content(role="user", parts=[types.Part(text=prompt)]))
        return contents

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
            response = await self._client.aio.models.generate_content(
                model=self._model,
                contents=instruction,
                config=types.GenerateContentConfig(temperature=temperature),
            )
        except Exception as e:
            raise LLMClientError(f"Gemini API call failed: {str(e)}") from e

        if response.text is None:
            raise LLMClientError("Empty response from Gemini API")

        return response.text

    async def stream_reply(self, context: LiveChatContext, prompt: str) -> AsyncIterator[str]:
        """
        Stream a reply using generate_content_stream.

        Args:
            context: Live chat context
            prompt: User prompt

        Yields:
            Non-empty text fragments in arrival order

        Raises:
            LLMClientError: If the API call or the stream fails
        """
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self._model,
                contents=self._build_contents(context, prompt),
                config=types.GenerateContentConfig(
                    system_instruction=context.system_instruction,
                ),
            )
        except Exception as e:
            raise LLMClientError(f"Gemini API call failed: {str(e)}") from e

        try:
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise LLMClientError(f"Gemini stream failed: {str(e)}") from e
        finally:
            await stream.aclose()
