"""Chatbot session: lazy one-time index build plus the ask / ask_stream pipeline."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator

from resume_rag.config.settings import Settings
from resume_rag.exceptions import EmptyGeneration, NoRelevantDocuments
from resume_rag.generation.answer_generator import AnswerGenerator
from resume_rag.ingestion.loader import DocumentLoader
from resume_rag.keyword_search.lexical_index import LexicalIndex
from resume_rag.models.domain import SessionState
from resume_rag.observability.logger import get_logger
from resume_rag.observability.metrics import log_generation_metrics
from resume_rag.observability.tracing import TraceContext
from resume_rag.protocols.embedder import Embedder
from resume_rag.query.refiner import QueryRefiner
from resume_rag.retrieval.ensemble_retriever import EnsembleRetriever
from resume_rag.retrieval.fusion import FusionWeights
from resume_rag.vectorstore.semantic_index import SemanticIndex

logger = get_logger("chatbot_session")


class ChatbotSession:
    """Answers questions about the résumé.

    The dual index is built on first use. Concurrent first callers share one
    in-flight build; a failed build leaves the session FAILED and the next
    call tries again. ``ask`` and ``ask_stream`` never raise for provider,
    ingestion or empty-result conditions: they map them to the configured
    user-facing messages and log the cause.
    """

    def __init__(
        self,
        settings: Settings,
        loader: DocumentLoader,
        embedder: Embedder,
        refiner: QueryRefiner,
        generator: AnswerGenerator,
    ) -> None:
        self._settings = settings
        self._loader = loader
        self._embedder = embedder
        self._refiner = refiner
        self._generator = generator

        self._state = SessionState.UNINITIALIZED
        self._build_task: asyncio.Task | None = None
        self._retriever: EnsembleRetriever | None = None
        self._lexical: LexicalIndex | None = None
        self._semantic: SemanticIndex | None = None
        self._chunk_count = 0

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def chunk_count(self) -> int:
        return self._chunk_count

    async def initialize(self) -> None:
        """Build the indexes once. Raises the build error to every waiting caller."""
        if self._state is SessionState.READY:
            return
        # No await between the check and the assignment: one build task per attempt.
        if self._build_task is None:
            self._state = SessionState.INITIALIZING
            self._build_task = asyncio.create_task(self._build())
        # A cancelled caller must not cancel the build others are waiting on.
        await asyncio.shield(self._build_task)

    async def _build(self) -> None:
        try:
            chunks = await asyncio.to_thread(self._loader.load, self._settings.resume_path)

            lexical = LexicalIndex(min_score=self._settings.lexical_min_score)
            await asyncio.to_thread(lexical.build, chunks)
            semantic = SemanticIndex(self._embedder, min_score=self._settings.semantic_min_score)
            await semantic.build(chunks)
        except BaseException as e:
            # Cancellation too: the next call starts a fresh build.
            self._state = SessionState.FAILED
            self._build_task = None
            logger.error("initialization_failed", error=str(e), error_type=type(e).__name__)
            raise

        self._lexical = lexical
        self._semantic = semantic
        self._retriever = EnsembleRetriever(
            semantic_index=semantic,
            lexical_index=lexical,
            k=self._settings.retrieval_k,
            weights=FusionWeights(
                semantic=self._settings.semantic_weight,
                lexical=self._settings.lexical_weight,
            ),
        )
        self._chunk_count = len(chunks)
        self._state = SessionState.READY
        logger.info(
            "session_ready",
            chunks=len(chunks),
            semantic_weight=self._settings.semantic_weight,
            lexical_weight=self._settings.lexical_weight,
        )

    async def _prepare(self, question: str, trace: TraceContext) -> tuple[str, str]:
        """Shared front half of both modes: initialize, refine, retrieve.

        Returns (context, refined_question). Raises NoRelevantDocuments when
        the fused context is blank.
        """
        with trace.span("initialize"):
            await self.initialize()
        with trace.span("refine"):
            refined = await self._refiner.refine(question)
        with trace.span("retrieve"):
            result = await self._retriever.retrieve(refined)

        if result.is_empty:
            raise NoRelevantDocuments(refined)
        return result.fused_context, refined

    async def ask(self, question: str) -> str:
        trace = TraceContext()
        logger.info("question_received", trace_id=trace.trace_id, question=question)
        try:
            context, refined = await self._prepare(question, trace)
            with trace.span("generate"):
                answer = await self._generator.generate(context, refined, streaming=False)
        except NoRelevantDocuments:
            logger.info("no_relevant_documents", trace_id=trace.trace_id)
            return self._settings.no_documents_message
        except EmptyGeneration:
            logger.warning("empty_generation", trace_id=trace.trace_id)
            return self._settings.no_answer_message
        except Exception as e:
            logger.exception(
                "question_failed",
                trace_id=trace.trace_id,
                stage=trace.failed_stage,
                error=str(e),
            )
            return self._settings.generic_error_message

        log_generation_metrics(trace.trace_id, streaming=False, answer_len=len(answer), fragments=1)
        logger.info("question_answered", **trace.summary())
        return answer

    async def ask_stream(self, question: str) -> AsyncGenerator[str, None]:
        """Yield answer fragments in order.

        The sequence ends normally, or after exactly one error fragment.
        Fragments already yielded are never retracted.
        """
        trace = TraceContext()
        logger.info("question_received", trace_id=trace.trace_id, question=question, stream=True)
        try:
            context, refined = await self._prepare(question, trace)
        except NoRelevantDocuments:
            logger.info("no_relevant_documents", trace_id=trace.trace_id)
            yield self._settings.no_documents_message
            return
        except Exception as e:
            logger.exception(
                "question_failed",
                trace_id=trace.trace_id,
                stage=trace.failed_stage,
                error=str(e),
            )
            yield self._settings.generic_error_message
            return

        fragments = self._generator.generate(context, refined, streaming=True)
        emitted = 0
        length = 0
        try:
            with trace.span("generate"):
                async for fragment in fragments:
                    emitted += 1
                    length += len(fragment)
                    yield fragment
        except Exception as e:
            logger.exception(
                "stream_failed", trace_id=trace.trace_id, error=str(e), fragments=emitted
            )
            yield self._settings.generic_error_message
            return
        finally:
            await fragments.aclose()

        if emitted == 0:
            logger.warning("empty_generation", trace_id=trace.trace_id)
            yield self._settings.no_answer_message
            return

        log_generation_metrics(trace.trace_id, streaming=True, answer_len=length, fragments=emitted)
        logger.info("question_answered", **trace.summary())
