"""Tests for building embedders and sessions from Settings."""

import pytest

from resume_rag.embeddings.cached_embedder import CachedEmbedder
from resume_rag.embeddings.factory import create_embedder
from resume_rag.embeddings.gemini_embedder import GeminiEmbedder
from resume_rag.embeddings.openai_embedder import OpenAIEmbedder
from resume_rag.exceptions import ConfigurationError
from resume_rag.models.domain import SessionState
from resume_rag.observability.tracing import TraceContext
from resume_rag.pipeline.builder import create_session


async def test_gemini_embedder_by_default(settings):
    embedder = await create_embedder(settings)
    assert isinstance(embedder, GeminiEmbedder)
    assert embedder.model == "text-embedding-004"


async def test_openai_embedder_when_selected(settings):
    s = settings.model_copy(update={"embedding_provider": "openai"})
    embedder = await create_embedder(s)
    assert isinstance(embedder, OpenAIEmbedder)
    assert embedder.model == "text-embedding-3-small"


async def test_explicit_embedding_model_wins(settings):
    s = settings.model_copy(
        update={"embedding_provider": "openai", "embedding_model": "text-embedding-3-large"}
    )
    assert (await create_embedder(s)).model == "text-embedding-3-large"


async def test_missing_embedding_key(settings):
    s = settings.model_copy(update={"embedding_provider": "openai", "openai_api_key": ""})
    with pytest.raises(ConfigurationError):
        await create_embedder(s)


async def test_cache_wraps_embedder(settings, tmp_path):
    s = settings.model_copy(update={"embedding_cache_db_path": str(tmp_path / "cache.db")})
    assert isinstance(await create_embedder(s), CachedEmbedder)


async def test_session_requires_google_key(settings):
    s = settings.model_copy(update={"google_api_key": ""})
    with pytest.raises(ConfigurationError):
        await create_session(s)


async def test_session_is_built_lazily(settings):
    session = await create_session(settings)
    assert session.state is SessionState.UNINITIALIZED
    assert session.chunk_count == 0


def test_trace_records_failed_stage():
    trace = TraceContext()
    with trace.span("refine"):
        pass
    with pytest.raises(RuntimeError):
        with trace.span("retrieve"):
            raise RuntimeError("index offline")
    assert trace.failed_stage == "retrieve"
    assert set(trace.summary()["stages"]) == {"refine", "retrieve"}
