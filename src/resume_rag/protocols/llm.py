"""Protocol for LLM providers."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Protocol

from resume_rag.models.domain import ModelTier


class LLMProvider(Protocol):
    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        model: ModelTier = ModelTier.PRIMARY,
    ) -> str: ...

    def generate_stream(
        self,
        prompt: str,
        system: str | None = None,
        model: ModelTier = ModelTier.PRIMARY,
    ) -> AsyncGenerator[str, None]: ...
