"""Protocol for splitting document text into reading-order chunks."""

from __future__ import annotations

from typing import Protocol

from resume_rag.models.domain import Chunk


class Chunker(Protocol):
    def chunk(self, text: str, metadata: dict) -> list[Chunk]: ...
