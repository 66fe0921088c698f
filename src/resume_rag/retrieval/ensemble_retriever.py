"""Ensemble retriever combining BM25 + FAISS semantic search with weighted rank fusion."""

from __future__ import annotations

import asyncio

from resume_rag.config.constants import CONTEXT_SEPARATOR
from resume_rag.keyword_search.lexical_index import LexicalIndex
from resume_rag.models.domain import RetrievalResult, ScoredChunk
from resume_rag.observability.logger import get_logger
from resume_rag.observability.metrics import log_retrieval_metrics
from resume_rag.retrieval.fusion import FusionWeights, weighted_rank_fusion
from resume_rag.vectorstore.semantic_index import SemanticIndex

logger = get_logger("ensemble_retriever")


def build_context(chunks: list[ScoredChunk]) -> str:
    """Join chunk texts in rank order; blank texts never reach the prompt."""
    return CONTEXT_SEPARATOR.join(c.chunk.text for c in chunks if c.chunk.text.strip())


class EnsembleRetriever:
    def __init__(
        self,
        semantic_index: SemanticIndex,
        lexical_index: LexicalIndex,
        k: int = 10,
        weights: FusionWeights = FusionWeights(),
    ) -> None:
        self._semantic = semantic_index
        self._lexical = lexical_index
        self._k = k
        self._weights = weights

    async def retrieve(self, query: str) -> RetrievalResult:
        # Independent strategies: run both, fuse once both are done.
        semantic_results, lexical_results = await asyncio.gather(
            self._semantic.retrieve(query, self._k),
            asyncio.to_thread(self._lexical.retrieve, query, self._k),
        )

        fused = weighted_rank_fusion(semantic_results, lexical_results, self._weights)
        log_retrieval_metrics(
            semantic_count=len(semantic_results),
            lexical_count=len(lexical_results),
            fused_count=len(fused),
            top_scores=[c.score for c in fused],
        )
        return RetrievalResult(chunks=fused, fused_context=build_context(fused))
