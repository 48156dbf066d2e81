"""Single-shot relay operations: follow-up chat, detailed answer, summary."""
from typing import Iterable

from loguru import logger

from schemas.chat import ChatMessage
from src.config.logger import preview
from src.llm.openrouter_client import OpenRouterClient
from src.llm.prompts import (
    DETAILED_PARAMS,
    FOLLOW_UP_PARAMS,
    SUMMARY_PARAMS,
    build_detailed_messages,
    build_follow_up_messages,
    build_summary_messages,
)


async def follow_up_reply(
    client: OpenRouterClient,
    original_question: str,
    original_answer: str,
    history: Iterable[ChatMessage],
    user_message: str,
) -> str:
    """
    Answer a follow-up message in the context of an earlier Q&A pair.

    Raises:
        UpstreamError: provider failure, propagated unchanged
    """
    logger.info("Chat message for Q: {}", preview(original_question))
    messages = build_follow_up_messages(
        original_question,
        original_answer,
        [m.model_dump() for m in history],
        user_message,
    )
    reply = await client.complete(messages, FOLLOW_UP_PARAMS)
    logger.info("Chat reply ready ({} chars)", len(reply))
    return reply


async def detailed_answer(client: OpenRouterClient, question: str) -> str:
    logger.info("Detailed answer for Q: {}", preview(question))
    return await client.complete(build_detailed_messages(question), DETAILED_PARAMS)


async def summarize_answer(client: OpenRouterClient, question: str, answer: str) -> str:
    logger.info("Summary for Q: {}", preview(question))
    return await client.complete(build_summary_messages(question, answer), SUMMARY_PARAMS)
