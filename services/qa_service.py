"""Batch Q&A relay: one streaming upstream call per question, in order."""
from contextlib import aclosing
from typing import AsyncGenerator, Iterable, List, Optional

from loguru import logger

from schemas.qa import (
    AnswerDoneEvent,
    CompleteEvent,
    ProgressEvent,
    StreamErrorEvent,
    TokenEvent,
)
from services.streaming_service import format_sse
from src.config.logger import preview
from src.llm.openrouter_client import OpenRouterClient
from src.llm.prompts import BATCH_PARAMS, build_batch_messages


def clean_questions(questions: Optional[Iterable[Optional[str]]]) -> List[str]:
    """Drop missing and blank questions, strip the rest, keep submission order."""
    return [q.strip() for q in questions or [] if q and q.strip()]


async def process_questions_stream(
    questions: List[str], client: OpenRouterClient
) -> AsyncGenerator[str, None]:
    """
    Relay a batch of questions as SSE.

    Flow, per question in submission order:
    1. ``progress`` event
    2. one ``token`` event per upstream delta
    3. exactly one ``answer_done`` event, with ``error`` set if the upstream
       call failed; the batch then moves on to the next question

    A single ``complete`` event closes the stream.

    Args:
        questions: Already cleaned, non-empty list of questions
        client: Upstream chat-completion client

    Yields:
        SSE-formatted strings
    """
    total = len(questions)
    logger.info("Processing {} questions (streaming)", total)
    try:
        for index, question in enumerate(questions):
            yield format_sse(
                ProgressEvent(current=index + 1, total=total, question=question, index=index)
            )

            answer_parts: List[str] = []
            try:
                deltas = client.stream(build_batch_messages(question), BATCH_PARAMS)
                async with aclosing(deltas):
                    async for delta in deltas:
                        answer_parts.append(delta)
                        yield format_sse(TokenEvent(index=index, chunk=delta))
            except Exception as exc:
                logger.warning("Q{} failed ({}): {}", index + 1, preview(question), exc)
                yield format_sse(
                    AnswerDoneEvent(index=index, question=question, answer=f"Error: {exc}", error=True)
                )
                continue

            yield format_sse(
                AnswerDoneEvent(index=index, question=question, answer="".join(answer_parts))
            )
            logger.info("Q{} streamed ({} chunks)", index + 1, len(answer_parts))

        yield format_sse(CompleteEvent(totalQuestions=total))
        logger.info("All {} questions processed", total)
    except Exception as exc:
        logger.exception("Batch stream aborted: {}", exc)
        yield format_sse(StreamErrorEvent(error=str(exc)))
