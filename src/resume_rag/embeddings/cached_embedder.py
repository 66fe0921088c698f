"""Caching wrapper around an Embedder that stores results in SQLite."""

from __future__ import annotations

from resume_rag.embeddings.cache import EmbeddingCache
from resume_rag.observability.logger import get_logger
from resume_rag.protocols.embedder import Embedder

logger = get_logger("cached_embedder")


class CachedEmbedder:
    """Wraps any Embedder, checks EmbeddingCache first, calls delegate for misses.

    Document and query embeddings are cached separately because providers may
    embed them with different task types.
    """

    def __init__(self, delegate: Embedder, cache: EmbeddingCache, model: str) -> None:
        self._delegate = delegate
        self._cache = cache
        self._doc_ns = f"{model}:document"
        self._query_ns = f"{model}:query"

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        cached = await self._cache.get_batch(self._doc_ns, texts)
        miss_indices = [i for i in range(len(texts)) if i not in cached]
        if not miss_indices:
            logger.info("embed_texts_all_cached", count=len(texts))
            return [cached[i] for i in range(len(texts))]

        miss_texts = [texts[i] for i in miss_indices]
        miss_embeddings = await self._delegate.embed_texts(miss_texts)
        await self._cache.put_batch(self._doc_ns, miss_texts, miss_embeddings)

        result = dict(cached)
        result.update(zip(miss_indices, miss_embeddings))
        logger.info(
            "embed_texts_with_cache",
            total=len(texts),
            hits=len(texts) - len(miss_indices),
            misses=len(miss_indices),
        )
        return [result[i] for i in range(len(texts))]

    async def embed_query(self, query: str) -> list[float]:
        cached = await self._cache.get_batch(self._query_ns, [query])
        if 0 in cached:
            logger.debug("embed_query_cache_hit", query_len=len(query))
            return cached[0]

        embedding = await self._delegate.embed_query(query)
        await self._cache.put_batch(self._query_ns, [query], [embedding])
        logger.debug("embed_query_cache_miss", query_len=len(query))
        return embedding
