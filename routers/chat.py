"""Single-shot routers: follow-up chat, detailed answer, summary."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from app.dependencies import get_llm_client
from schemas.chat import (
    ChatRequest,
    ChatResponse,
    DetailedAnswerRequest,
    DetailedAnswerResponse,
    SummarizeRequest,
    SummarizeResponse,
)
from services.chat_service import detailed_answer, follow_up_reply, summarize_answer
from src.llm.errors import (
    UpstreamConnectionError,
    UpstreamEmptyResponseError,
    UpstreamError,
    UpstreamStatusError,
)
from src.llm.openrouter_client import OpenRouterClient

router = APIRouter()


def _is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def _upstream_http_error(exc: UpstreamError) -> HTTPException:
    """Map an upstream failure to the status the caller sees."""
    if isinstance(exc, UpstreamStatusError):
        return HTTPException(status_code=502, detail=f"AI API failed: {exc.status_code}")
    if isinstance(exc, UpstreamEmptyResponseError):
        return HTTPException(status_code=500, detail="Invalid response from AI service")
    if isinstance(exc, UpstreamConnectionError):
        return HTTPException(status_code=503, detail=f"AI service unreachable: {exc}")
    return HTTPException(status_code=502, detail=f"AI service error: {exc}")


@router.post("/chat", response_model=ChatResponse)
async def chat(request: ChatRequest, client: OpenRouterClient = Depends(get_llm_client)):
    """
    Follow-up conversation about one answered question.

    The original question and answer are sent as system context, followed by
    the prior turns in ``history`` and the new ``userMessage``.
    """
    if (
        _is_blank(request.original_question)
        or _is_blank(request.original_answer)
        or _is_blank(request.user_message)
    ):
        raise HTTPException(
            status_code=400,
            detail="originalQuestion, originalAnswer, and userMessage are required.",
        )

    try:
        reply = await follow_up_reply(
            client,
            request.original_question,
            request.original_answer,
            request.history,
            request.user_message,
        )
    except UpstreamError as e:
        raise _upstream_http_error(e)
    return ChatResponse(reply=reply)


@router.post("/detailed-answer", response_model=DetailedAnswerResponse)
async def detailed(request: DetailedAnswerRequest, client: OpenRouterClient = Depends(get_llm_client)):
    """Expanded answer with examples for a single question."""
    if _is_blank(request.question):
        raise HTTPException(status_code=400, detail="Question is required.")

    try:
        answer = await detailed_answer(client, request.question)
    except UpstreamError as e:
        raise _upstream_http_error(e)
    return DetailedAnswerResponse(answer=answer, question=request.question)


@router.post("/summarize-answer", response_model=SummarizeResponse)
async def summarize(request: SummarizeRequest, client: OpenRouterClient = Depends(get_llm_client)):
    """One or two sentence summary of an existing answer."""
    if _is_blank(request.question) or _is_blank(request.answer):
        raise HTTPException(status_code=400, detail="Both question and answer are required.")

    try:
        summary = await summarize_answer(client, request.question, request.answer)
    except UpstreamError as e:
        raise _upstream_http_error(e)
    return SummarizeResponse(summary=summary, original_answer=request.answer)
