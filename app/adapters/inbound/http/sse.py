"""Server-Sent Events framing."""

import json

from app.application.dtos.chat import StreamEvent

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable proxy buffering so fragments flush immediately
}


def format_sse_event(event: StreamEvent) -> str:
    """
    Format a stream event as an SSE data frame.

    Args:
        event: Stream event

    Returns:
        "data: <json>" followed by a blank line
    """
    return f"data: {json.dumps(event.to_payload(), ensure_ascii=False)}\n\n"
