"""Unit tests for OpenAILLMClient."""

from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from app.adapters.outbound.llm.openai_llm_client import OpenAILLMClient
from app.application.ports.llm_client import LLMClient
from app.domain.entities.live_chat_context import LiveChatContext, PrimingTurn
from app.domain.entities.session_record import TurnRole
from app.domain.errors import LLMClientError


class FakeChunkStream:
    """Async iterable standing in for an OpenAI chunk stream."""

    def __init__(self, chunks, error=None):
        self._chunks = list(chunks)
        self._error = error
        self.closed = False

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self._chunks:
            yield chunk
        if self._error is not None:
            raise self._error

    async def close(self):
        self.closed = True


def make_chunk(content):
    chunk = Mock()
    if content is None:
        chunk.choices = []
    else:
        chunk.choices = [Mock()]
        chunk.choices[0].delta.content = content
    return chunk


@pytest.fixture
def openai_client():
    """Create OpenAILLMClient with test API key."""
    with patch("app.adapters.outbound.llm.openai_llm_client.AsyncOpenAI") as mock_openai_class:
        mock_client_instance = Mock()
        mock_client_instance.chat.completions.create = AsyncMock()
        mock_openai_class.return_value = mock_client_instance
        client = OpenAILLMClient(api_key="test-api-key", model="gpt-4o-mini", timeout_seconds=5)
        yield client


@pytest.fixture
def context():
    return LiveChatContext(
        session_id="s1",
        consultant_id="financial_advisor",
        system_instruction="你是財務顧問。",
        turns=[
            PrimingTurn(role=TurnRole.USER, text="q1"),
            PrimingTurn(role=TurnRole.MODEL, text="a1"),
        ],
    )


def test_openai_client_implements_llm_client_port(openai_client):
    """Test that OpenAILLMClient implements LLMClient port."""
    assert isinstance(openai_client, LLMClient)


def test_openai_client_raises_error_when_api_key_missing(monkeypatch):
    """Test that OpenAILLMClient raises error when API key is missing."""
    from app.infrastructure.config.settings import settings

    monkeypatch.setattr(settings, "openai_api_key", None)
    with patch("app.adapters.outbound.llm.openai_llm_client.AsyncOpenAI"):
        with pytest.raises(ValueError, match="OpenAI API key is required"):
            OpenAILLMClient(api_key="")


@pytest.mark.asyncio
async def test_generate_calls_openai_api(openai_client):
    """Test that generate sends one user message with the given temperature."""
    response = Mock()
    response.choices = [Mock()]
    response.choices[0].message.content = "YES"
    openai_client._client.chat.completions.create.return_value = response

    answer = await openai_client.generate("請判斷是否相關", temperature=0.1)

    assert answer == "YES"
    call_kwargs = openai_client._client.chat.completions.create.call_args.kwargs
    assert call_kwargs["model"] == "gpt-4o-mini"
    assert call_kwargs["temperature"] == 0.1
    assert call_kwargs["messages"] == [{"role": "user", "content": "請判斷是否相關"}]


@pytest.mark.asyncio
async def test_generate_wraps_api_errors(openai_client):
    """Test that API errors surface as LLMClientError."""
    openai_client._client.chat.completions.create.side_effect = Exception("API Error")

    with pytest.raises(LLMClientError, match="OpenAI API call failed"):
        await openai_client.generate("instruction", temperature=0.1)


@pytest.mark.asyncio
async def test_generate_rejects_empty_response(openai_client):
    """Test that an empty completion raises LLMClientError."""
    response = Mock()
    response.choices = []
    openai_client._client.chat.completions.create.return_value = response

    with pytest.raises(LLMClientError, match="Empty response"):
        await openai_client.generate("instruction", temperature=0.1)


@pytest.mark.asyncio
async def test_stream_reply_yields_fragments_in_order(openai_client, context):
    """Test stream_reply yields non-empty deltas and skips empty chunks."""
    stream = FakeChunkStream(
        [make_chunk("ETF "), make_chunk(None), make_chunk(""), make_chunk("建議")]
    )
    openai_client._client.chat.completions.create.return_value = stream

    fragments = [fragment async for fragment in openai_client.stream_reply(context, "q2")]

    assert fragments == ["ETF ", "建議"]
    assert stream.closed is True


@pytest.mark.asyncio
async def test_stream_reply_sends_history_in_order(openai_client, context):
    """Test messages are system instruction, prior turns, then the prompt."""
    openai_client._client.chat.completions.create.return_value = FakeChunkStream([])

    [fragment async for fragment in openai_client.stream_reply(context, "q2")]

    call_kwargs = openai_client._client.chat.completions.create.call_args.kwargs
    assert call_kwargs["stream"] is True
    assert call_kwargs["messages"] == [
        {"role": "system", "content": "你是財務顧問。"},
        {"role": "user", "content": "q1"},
        {"role": "assistant", "content": "a1"},
        {"role": "user", "content": "q2"},
    ]


@pytest.mark.asyncio
async def test_stream_reply_wraps_mid_stream_errors(openai_client, context):
    """Test an error during iteration raises LLMClientError after earlier fragments."""
    stream = FakeChunkStream([make_chunk("partial")], error=ConnectionError("reset"))
    openai_client._client.chat.completions.create.return_value = stream
    received = []

    with pytest.raises(LLMClientError, match="OpenAI stream failed"):
        async for fragment in openai_client.stream_reply(context, "q2"):
            received.append(fragment)

    assert received == ["partial"]
    assert stream.closed is True


@pytest.mark.asyncio
async def test_stream_reply_wraps_connection_errors(openai_client, context):
    """Test a failure opening the stream raises LLMClientError."""
    openai_client._client.chat.completions.create.side_effect = Exception("timeout")

    with pytest.raises(LLMClientError, match="OpenAI API call failed"):
        async for _ in openai_client.stream_reply(context, "q2"):
            pass


@pytest.mark.asyncio
async def test_stream_reply_closes_stream_on_early_exit(openai_client, context):
    """Test closing the generator early closes the underlying stream."""
    stream = FakeChunkStream([make_chunk("a"), make_chunk("b")])
    openai_client._client.chat.completions.create.return_value = stream

    fragments = openai_client.stream_reply(context, "q2")
    assert await fragments.__anext__() == "a"
    await fragments.aclose()

    assert stream.closed is True


def make_failing_client(requests):
    """Create a client whose HTTP transport answers 500 to every request."""

    def handler(request):
        requests.append(request.url.path)
        return httpx.Response(500, json={"error": {"message": "server error"}})

    return OpenAILLMClient(
        api_key="test-api-key",
        model="gpt-4o-mini",
        timeout_seconds=5,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.mark.asyncio
async def test_stream_reply_is_not_retried_on_server_error(context):
    """Test a failed streaming call reaches the backend exactly once."""
    requests = []
    client = make_failing_client(requests)

    with pytest.raises(LLMClientError):
        async for _ in client.stream_reply(context, "q2"):
            pass

    assert requests == ["/v1/chat/completions"]


@pytest.mark.asyncio
async def test_generate_is_not_retried_on_server_error():
    """Test a failed single-shot call reaches the backend exactly once."""
    requests = []
    client = make_failing_client(requests)

    with pytest.raises(LLMClientError):
        await client.generate("instruction", temperature=0.1)

    assert requests == ["/v1/chat/completions"]
