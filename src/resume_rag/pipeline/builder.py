"""Wires the production components of a ChatbotSession from Settings."""

from __future__ import annotations

from resume_rag.chunking.structure_chunker import StructureChunker
from resume_rag.config.settings import Settings
from resume_rag.embeddings.factory import create_embedder
from resume_rag.exceptions import ConfigurationError
from resume_rag.generation.answer_generator import AnswerGenerator
from resume_rag.generation.gemini_provider import GeminiProvider
from resume_rag.ingestion.loader import DocumentLoader
from resume_rag.models.domain import ModelTier
from resume_rag.pipeline.chatbot_session import ChatbotSession
from resume_rag.query.refiner import QueryRefiner


async def create_session(settings: Settings) -> ChatbotSession:
    """Construct (but do not initialize) a session; indexes build on first use."""
    if not settings.google_api_key:
        raise ConfigurationError("RAG_GOOGLE_API_KEY is required for the Gemini models")
    llm = GeminiProvider(
        api_key=settings.google_api_key,
        model=settings.gemini_model,
        lite_model=settings.gemini_lite_model,
        temperature=settings.gemini_temperature,
        max_tokens=settings.gemini_max_tokens,
        timeout_s=settings.llm_timeout_s,
    )
    embedder = await create_embedder(settings)
    chunker = StructureChunker(
        max_tokens=settings.chunk_max_tokens,
        overlap_pct=settings.chunk_overlap_pct,
    )
    return ChatbotSession(
        settings=settings,
        loader=DocumentLoader(chunker),
        embedder=embedder,
        refiner=QueryRefiner(
            llm,
            role=settings.interviewee_role,
            model=ModelTier(settings.refine_model),
            enabled=settings.query_refinement_enabled,
        ),
        generator=AnswerGenerator(
            llm,
            interviewee_name=settings.interviewee_name,
            refusal_message=settings.refusal_message,
        ),
    )
