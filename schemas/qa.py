"""Batch Q&A request model and SSE event models."""
import time
from typing import List, Literal, Optional

from pydantic import BaseModel, Field


def now_ms() -> int:
    """Milliseconds since the epoch, the timestamp unit of every event."""
    return int(time.time() * 1000)


class AskQuestionsRequest(BaseModel):
    """Request model for the batch ask endpoint."""
    questions: Optional[List[Optional[str]]] = None


class ProgressEvent(BaseModel):
    """Sent right before a question's upstream call starts."""
    type: Literal["progress"] = "progress"
    current: int
    total: int
    question: str
    index: int
    status: Literal["processing"] = "processing"
    timestamp: int = Field(default_factory=now_ms)


class TokenEvent(BaseModel):
    """One incremental text fragment for question ``index``."""
    type: Literal["token"] = "token"
    index: int
    chunk: str


class AnswerDoneEvent(BaseModel):
    """Final answer (or failure message) for question ``index``."""
    type: Literal["answer_done"] = "answer_done"
    index: int
    question: str
    answer: str
    error: bool = False
    timestamp: int = Field(default_factory=now_ms)


class CompleteEvent(BaseModel):
    type: Literal["complete"] = "complete"
    totalQuestions: int


class StreamErrorEvent(BaseModel):
    """Sent when the stream has to stop after it was opened."""
    type: Literal["error"] = "error"
    error: str
