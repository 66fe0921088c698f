"""Weighted rank fusion for merging semantic and lexical retrieval results."""

from __future__ import annotations

from dataclasses import dataclass

from resume_rag.models.domain import Chunk, RetrievalSource, ScoredChunk


@dataclass(frozen=True)
class FusionWeights:
    semantic: float = 0.7
    lexical: float = 0.3

    def __post_init__(self) -> None:
        if self.semantic < 0 or self.lexical < 0:
            raise ValueError("fusion weights must be non-negative")


def rank_contribution(rank: int) -> float:
    """Normalized contribution of a 0-based rank: 1, 1/2, 1/3, ..."""
    return 1.0 / (rank + 1)


def weighted_rank_fusion(
    semantic: list[ScoredChunk],
    lexical: list[ScoredChunk],
    weights: FusionWeights = FusionWeights(),
) -> list[ScoredChunk]:
    """Merge two ranked lists by weighted rank rather than raw score.

    Raw BM25 and cosine scores are on different scales, so only each chunk's
    position matters. A chunk missing from one list gets nothing from it.
    Chunks are deduplicated by id; if a list repeats a chunk its best rank is
    used. Ties go to the lower chunk id. The result keeps the whole union.

    Returns:
        ScoredChunk items with ``source=FUSED`` sorted by fused score descending.
    """
    scores: dict[int, float] = {}
    chunks: dict[int, Chunk] = {}
    for weight, ranked in ((weights.semantic, semantic), (weights.lexical, lexical)):
        seen: set[int] = set()
        for rank, item in enumerate(ranked):
            cid = item.chunk.chunk_id
            chunks.setdefault(cid, item.chunk)
            scores.setdefault(cid, 0.0)
            if cid in seen:
                continue
            seen.add(cid)
            scores[cid] += weight * rank_contribution(rank)

    ordered = sorted(scores.items(), key=lambda kv: (-kv[1], kv[0]))
    return [
        ScoredChunk(chunk=chunks[cid], score=score, source=RetrievalSource.FUSED)
        for cid, score in ordered
    ]
