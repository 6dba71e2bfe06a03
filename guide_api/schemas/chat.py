"""Pydantic schemas for the assistant chat and health endpoints."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Single chat message forwarded to the upstream model."""

    message: str = Field(
        ...,
        description="User message or pre-formatted prompt.",
        examples=["What should I see around Aktau in two days?"],
    )

    @field_validator("message")
    @classmethod
    def _message_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message is required")
        return value


class ContextMessage(BaseModel):
    """One turn of a conversation."""

    text: str = Field(..., description="Message text.")
    sender: str = Field(
        ...,
        description="'user' for the traveller; any other value is the guide.",
        examples=["user", "bot"],
    )


class ChatContextRequest(BaseModel):
    """Conversation history; the last entry is usually the new question."""

    messages: list[ContextMessage] = Field(
        ...,
        min_length=1,
        description="Conversation turns in chronological order.",
    )


class ChatResponse(BaseModel):
    reply: str = Field(..., description="Assistant reply text.")


class HealthResponse(BaseModel):
    """Liveness payload, also reporting upstream readiness."""

    status: Literal["OK"] = "OK"
    timestamp: str = Field(..., description="ISO-8601 UTC server time.")
    provider: str = Field(..., description="Configured LLM provider.")
    has_api_key: bool = Field(..., description="Whether LLM_API_KEY is configured.")
    queued_requests: int = Field(
        ...,
        ge=0,
        description="Upstream calls waiting behind the one in flight.",
    )
