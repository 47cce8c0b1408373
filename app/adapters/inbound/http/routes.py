"""HTTP routes."""

from collections.abc import AsyncIterator
from contextlib import aclosing
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse

from app.adapters.inbound.http.sse import SSE_HEADERS, format_sse_event
from app.application.dtos.chat import StreamChatRequest
from app.application.dtos.history import HistoryRequest, SessionHistory, SessionRecordList
from app.application.use_cases.get_session_history import GetSessionHistory
from app.application.use_cases.stream_chat_use_case import StreamChatUseCase
from app.domain.errors import ConsultantGatewayError
from app.infrastructure.logging.logger import log_turn
from app.infrastructure.wiring.dependencies import (
    get_session_history_use_case,
    get_stream_chat_use_case,
)

router = APIRouter()


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.post("/sse/stream")
async def stream_chat(
    request: StreamChatRequest,
    use_case: StreamChatUseCase = Depends(get_stream_chat_use_case),
) -> StreamingResponse:
    """
    Stream a consultant's reply as Server-Sent Events.

    Client errors (missing fields, unknown consultant) are returned as plain
    HTTP errors before the stream starts. Every other outcome, including an
    off-topic rejection, is delivered as stream events.

    Args:
        request: Prompt, sessionId and consultantId

    Returns:
        text/event-stream response of text, final and error events

    Raises:
        HTTPException: 400 for missing fields, 404 for an unknown consultant
    """
    # Generate turn_id for request correlation
    turn_id = str(uuid4())

    log_turn(
        session_id=request.session_id,
        turn_id=turn_id,
        component="http",
        consultant_id=request.consultant_id,
        prompt_length=len(request.prompt or ""),
    )

    try:
        persona = await use_case.resolve_persona(request)
    except ConsultantGatewayError as e:
        log_turn(
            session_id=request.session_id,
            turn_id=turn_id,
            component="http",
            rejected_status=e.status_code,
        )
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    async def event_stream() -> AsyncIterator[str]:
        async with aclosing(use_case.stream(request, persona, turn_id=turn_id)) as events:
            async for event in events:
                yield format_sse_event(event)

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post("/api/history", status_code=status.HTTP_200_OK, response_model=SessionHistory)
async def get_history(
    request: HistoryRequest,
    use_case: GetSessionHistory = Depends(get_session_history_use_case),
) -> SessionHistory:
    """
    Get the persisted history of a session.

    Args:
        request: Body carrying sessionId

    Returns:
        Session history with role, content and timestamp per turn

    Raises:
        HTTPException: 400 if sessionId is missing, 404 if the session is unknown
    """
    try:
        return await use_case.execute(request.session_id)
    except ConsultantGatewayError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/api/records/all", status_code=status.HTTP_200_OK, response_model=SessionRecordList)
async def list_records(
    use_case: GetSessionHistory = Depends(get_session_history_use_case),
) -> SessionRecordList:
    """
    List every persisted session, most recently updated first.

    Returns:
        Record count and label/value pairs (first prompt excerpt, sessionId)
    """
    return await use_case.list_records()
