"""Core domain objects used throughout the system."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class RetrievalSource(str, Enum):
    LEXICAL = "lexical"
    SEMANTIC = "semantic"
    FUSED = "fused"


class ModelTier(str, Enum):
    PRIMARY = "primary"
    LITE = "lite"


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class Chunk:
    """A unit of résumé text. ``chunk_id`` is its position in reading order."""

    chunk_id: int
    text: str
    metadata: dict = field(default_factory=dict, compare=False, hash=False)


@dataclass
class ScoredChunk:
    chunk: Chunk
    score: float
    source: RetrievalSource


@dataclass
class RetrievalResult:
    chunks: list[ScoredChunk]
    fused_context: str

    @property
    def is_empty(self) -> bool:
        return not self.fused_context.strip()


@dataclass
class GenerationRequest:
    refined_question: str
    context: str
    streaming: bool = False
    model: ModelTier = ModelTier.PRIMARY
