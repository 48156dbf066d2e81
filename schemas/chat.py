"""Single-shot request/response models (follow-up chat, detailed answer, summary)."""
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One prior turn of a follow-up conversation."""
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """Follow-up question about an earlier Q&A pair.

    Required fields are optional at the model level so that missing values
    are reported with the same 400 error as blank ones.
    """
    model_config = ConfigDict(populate_by_name=True)

    original_question: Optional[str] = Field(None, alias="originalQuestion")
    original_answer: Optional[str] = Field(None, alias="originalAnswer")
    history: List[ChatMessage] = Field(default_factory=list)
    user_message: Optional[str] = Field(None, alias="userMessage")


class ChatResponse(BaseModel):
    success: bool = True
    reply: str


class DetailedAnswerRequest(BaseModel):
    question: Optional[str] = None


class DetailedAnswerResponse(BaseModel):
    success: bool = True
    answer: str
    question: str


class SummarizeRequest(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None


class SummarizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    summary: str
    original_answer: str = Field(..., alias="originalAnswer")
