from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Iterable, List, Mapping

Message = Dict[str, str]


@dataclass(frozen=True)
class GenerationParams:
    max_tokens: int
    temperature: float


BATCH_PARAMS = GenerationParams(max_tokens=400, temperature=0.3)
FOLLOW_UP_PARAMS = GenerationParams(max_tokens=800, temperature=0.7)
DETAILED_PARAMS = GenerationParams(max_tokens=1000, temperature=0.7)
SUMMARY_PARAMS = GenerationParams(max_tokens=150, temperature=0.3)


@lru_cache(maxsize=1)
def _get_system_prompt() -> str:
    """
    Cached system prompt; identical content reused for every batch question.
    """
    return (
        "You are a clear and helpful assistant. Follow these rules:\n"
        "1. For general/conceptual questions: Give a clear answer in 2-4 sentences. Use simple language.\n"
        "2. For comparison questions (like \"difference between X and Y\"): Use short labeled points. "
        "Example: \"var: function-scoped. let: block-scoped. const: block-scoped, cannot be reassigned.\"\n"
        "3. For code/solution questions: Provide complete working code with a brief explanation.\n"
        "4. Always be concise but complete. Never sacrifice clarity for brevity."
    )


def build_batch_messages(question: str) -> List[Message]:
    return [
        {"role": "system", "content": _get_system_prompt()},
        {"role": "user", "content": question},
    ]


def build_follow_up_messages(
    original_question: str,
    original_answer: str,
    history: Iterable[Mapping[str, str]],
    user_message: str,
) -> List[Message]:
    """System context with the original Q&A pair, prior turns, then the new message."""
    system = (
        "You are a helpful AI assistant. The user is asking follow-up questions about a specific Q&A pair.\n\n"
        f"Original Question: \"{original_question}\"\n"
        f"Original Answer: \"{original_answer}\"\n\n"
        "Answer follow-up questions on this topic. Be conversational, helpful, and thorough."
    )
    messages: List[Message] = [{"role": "system", "content": system}]
    messages.extend({"role": m["role"], "content": m["content"]} for m in history)
    messages.append({"role": "user", "content": user_message.strip()})
    return messages


def build_detailed_messages(question: str) -> List[Message]:
    return [
        {
            "role": "system",
            "content": "You are a helpful assistant. Provide a detailed, comprehensive answer with examples.",
        },
        {"role": "user", "content": f"Detailed answer: {question}"},
    ]


def build_summary_messages(question: str, answer: str) -> List[Message]:
    return [
        {"role": "system", "content": "Summarize the answer in 1-2 sentences max. Be brief."},
        {"role": "user", "content": f"Q: {question}\nA: {answer}\nSummarize:"},
    ]
