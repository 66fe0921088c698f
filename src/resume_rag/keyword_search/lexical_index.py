"""BM25 keyword index over the résumé chunks using rank_bm25."""

from __future__ import annotations

import math

import numpy as np
from rank_bm25 import BM25Okapi

from resume_rag.keyword_search.tokenizer import tokenize
from resume_rag.models.domain import Chunk, RetrievalSource, ScoredChunk
from resume_rag.observability.logger import get_logger

logger = get_logger("bm25_index")


class _PositiveIdfBM25(BM25Okapi):
    """Okapi BM25 with the Lucene IDF, log(1 + (N - df + 0.5) / (df + 0.5)).

    The classic Okapi IDF is zero or negative for a term found in half the
    chunks or more, which on a few-chunk résumé hides rare-term matches.
    """

    def _calc_idf(self, nd):
        for word, freq in nd.items():
            self.idf[word] = math.log(1 + (self.corpus_size - freq + 0.5) / (freq + 0.5))


class LexicalIndex:
    """BM25 relevance ranking built once from a static corpus.

    Retrieval is synchronous and CPU-bound; callers on the event loop should
    offload it (the ensemble uses ``asyncio.to_thread``).
    """

    def __init__(self, min_score: float | None = None) -> None:
        self._bm25: _PositiveIdfBM25 | None = None
        self._chunks: list[Chunk] = []
        self._min_score = min_score

    def build(self, chunks: list[Chunk]) -> None:
        """Build the BM25 index from a list of chunks. Replaces existing index."""
        self._chunks = list(chunks)
        tokenized_corpus = [tokenize(c.text) for c in self._chunks]
        # BM25 divides by corpus length, so an all-stopword corpus still needs a token.
        if any(tokenized_corpus):
            self._bm25 = _PositiveIdfBM25([tokens or [""] for tokens in tokenized_corpus])
        else:
            self._bm25 = None
        logger.info("bm25_built", size=len(self._chunks))

    def retrieve(self, query: str, k: int = 10) -> list[ScoredChunk]:
        """Return up to ``k`` chunks by descending BM25 score, ties by reading order."""
        if not self._chunks or k <= 0:
            return []
        tokenized_query = tokenize(query)
        if self._bm25 is None or not tokenized_query:
            scores = np.zeros(len(self._chunks))
        else:
            scores = np.asarray(self._bm25.get_scores(tokenized_query), dtype=float)

        # Stable sort on the negated score keeps lower chunk ids first on ties.
        order = np.argsort(-scores, kind="stable")
        results: list[ScoredChunk] = []
        for i in order:
            score = float(scores[i])
            if self._min_score is not None and score < self._min_score:
                continue
            results.append(
                ScoredChunk(chunk=self._chunks[i], score=score, source=RetrievalSource.LEXICAL)
            )
            if len(results) == k:
                break
        return results

    @property
    def size(self) -> int:
        return len(self._chunks)
