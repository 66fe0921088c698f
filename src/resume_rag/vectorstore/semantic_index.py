"""In-memory FAISS semantic index over the résumé chunks."""

from __future__ import annotations

import asyncio

import faiss
import numpy as np

from resume_rag.exceptions import EmbeddingError, RetrievalError
from resume_rag.models.domain import Chunk, RetrievalSource, ScoredChunk
from resume_rag.observability.logger import get_logger
from resume_rag.protocols.embedder import Embedder

logger = get_logger("semantic_index")


class SemanticIndex:
    """Cosine-similarity nearest-neighbour lookup.

    Chunk vectors are L2-normalized into an inner-product index, so the
    returned scores are cosine similarities in [-1, 1].
    """

    def __init__(self, embedder: Embedder, min_score: float | None = None) -> None:
        self._embedder = embedder
        self._min_score = min_score
        self._index: faiss.Index | None = None
        self._chunks: list[Chunk] = []
        self._built = False

    async def build(self, chunks: list[Chunk]) -> None:
        """Embed every chunk (batched by the embedder) and load the vectors."""
        chunks = list(chunks)
        embeddings = await self._embedder.embed_texts([c.text for c in chunks])
        if len(embeddings) != len(chunks):
            raise EmbeddingError(
                f"Embedder returned {len(embeddings)} vectors for {len(chunks)} chunks"
            )
        if not chunks:
            self._index = None
            self._chunks = []
            self._built = True
            return

        matrix = np.array(embeddings, dtype=np.float32)
        faiss.normalize_L2(matrix)
        index = faiss.IndexFlatIP(matrix.shape[1])
        index.add(matrix)

        self._index = index
        self._chunks = chunks
        self._built = True
        logger.info("semantic_index_built", size=index.ntotal, dimensions=matrix.shape[1])

    async def retrieve(self, query: str, k: int = 10) -> list[ScoredChunk]:
        """One embedding call for the query, then an exact top-``k`` search."""
        if not self._built:
            raise RetrievalError("Semantic index has not been built")
        if self._index is None or k <= 0:
            return []

        query_embedding = await self._embedder.embed_query(query)
        return await asyncio.to_thread(self._search, query_embedding, k)

    def _search(self, query_embedding: list[float], k: int) -> list[ScoredChunk]:
        query_array = np.array(query_embedding, dtype=np.float32).reshape(1, -1)
        if query_array.shape[1] != self._index.d:
            raise EmbeddingError(
                f"Query embedding has {query_array.shape[1]} dimensions, index has {self._index.d}"
            )
        faiss.normalize_L2(query_array)
        scores, indices = self._index.search(query_array, min(k, self._index.ntotal))

        hits: list[tuple[float, int]] = []
        for idx, score in zip(indices[0], scores[0]):
            idx = int(idx)
            if idx == -1:
                continue
            if self._min_score is not None and float(score) < self._min_score:
                continue
            hits.append((float(score), idx))
        # FAISS does not promise an order among equal scores; fall back to reading order.
        hits.sort(key=lambda h: (-h[0], self._chunks[h[1]].chunk_id))
        return [
            ScoredChunk(chunk=self._chunks[idx], score=score, source=RetrievalSource.SEMANTIC)
            for score, idx in hits
        ]

    @property
    def size(self) -> int:
        return 0 if self._index is None else self._index.ntotal
