"""Builds the configured embedder, optionally wrapped in the SQLite cache."""

from __future__ import annotations

from resume_rag.config.settings import Settings
from resume_rag.embeddings.cache import EmbeddingCache
from resume_rag.embeddings.cached_embedder import CachedEmbedder
from resume_rag.embeddings.gemini_embedder import GeminiEmbedder
from resume_rag.embeddings.openai_embedder import OpenAIEmbedder
from resume_rag.exceptions import ConfigurationError
from resume_rag.protocols.embedder import Embedder

DEFAULT_EMBEDDING_MODELS = {
    "gemini": "text-embedding-004",
    "openai": "text-embedding-3-small",
}


def resolve_embedding_model(settings: Settings) -> str:
    return settings.embedding_model or DEFAULT_EMBEDDING_MODELS[settings.embedding_provider]


async def create_embedder(settings: Settings) -> Embedder:
    model = resolve_embedding_model(settings)
    if settings.embedding_provider == "gemini":
        if not settings.google_api_key:
            raise ConfigurationError("RAG_GOOGLE_API_KEY is required for Gemini embeddings")
        embedder: Embedder = GeminiEmbedder(
            api_key=settings.google_api_key,
            model=model,
            batch_size=settings.embedding_batch_size,
            timeout_s=settings.llm_timeout_s,
        )
    else:
        if not settings.openai_api_key:
            raise ConfigurationError("RAG_OPENAI_API_KEY is required for OpenAI embeddings")
        embedder = OpenAIEmbedder(
            api_key=settings.openai_api_key,
            model=model,
            batch_size=settings.embedding_batch_size,
            timeout_s=settings.llm_timeout_s,
        )

    if settings.embedding_cache_db_path:
        cache = EmbeddingCache(settings.embedding_cache_db_path)
        await cache.initialize()
        embedder = CachedEmbedder(delegate=embedder, cache=cache, model=model)
    return embedder
