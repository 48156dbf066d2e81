"""QA router for the batch question streaming endpoint."""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from app.dependencies import get_llm_client
from schemas.qa import AskQuestionsRequest
from services.qa_service import clean_questions, process_questions_stream
from services.streaming_service import SSE_HEADERS
from src.llm.openrouter_client import OpenRouterClient

router = APIRouter()


@router.post("/ask-questions")
async def ask_questions(
    request: AskQuestionsRequest,
    client: OpenRouterClient = Depends(get_llm_client),
):
    """
    Streaming SSE endpoint for a batch of questions.

    Questions are answered one at a time in submission order. For each one
    the stream carries a ``progress`` event, the answer's ``token`` events
    and an ``answer_done`` event; a final ``complete`` event ends it.
    Validation failures are returned as 400 before the stream opens.
    """
    if not request.questions:
        raise HTTPException(status_code=400, detail="Questions array is required.")

    questions = clean_questions(request.questions)
    if not questions:
        raise HTTPException(status_code=400, detail="At least one valid question is required.")

    return StreamingResponse(
        process_questions_stream(questions, client),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )
