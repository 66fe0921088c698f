"""Pydantic models for API request/response serialization."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, field_validator


def _now() -> datetime:
    return datetime.now(timezone.utc)


class AskRequest(BaseModel):
    message: str = Field(max_length=2000)

    @field_validator("message")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message must not be blank")
        return v


class AskResponse(BaseModel):
    success: bool = True
    question: str
    answer: str
    timestamp: datetime = Field(default_factory=_now)


class StreamEvent(BaseModel):
    type: Literal["chunk", "done", "error"]
    content: str | None = None
    timestamp: datetime = Field(default_factory=_now)

    def to_sse(self) -> str:
        return f"data: {self.model_dump_json(exclude_none=True)}\n\n"


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class StatusResponse(BaseModel):
    success: bool = True
    message: str
    endpoint: str
    methods: list[str]


class HealthResponse(BaseModel):
    status: str
    session_state: str
    chunk_count: int
