"""SSE streaming utilities."""
from pydantic import BaseModel

SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


def format_sse(event: BaseModel) -> str:
    """
    Render an event model as one SSE message.

    Args:
        event: Any of the event models in ``schemas.qa``

    Returns:
        SSE-formatted string: "data: {...}\\n\\n"
    """
    # model_dump_json() gives properly escaped JSON on a single line
    return f"data: {event.model_dump_json()}\n\n"
