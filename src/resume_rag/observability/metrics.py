"""Metric recording helpers, emitted as structured log events."""

from __future__ import annotations

from resume_rag.observability.logger import get_logger

logger = get_logger("metrics")


def log_retrieval_metrics(
    semantic_count: int,
    lexical_count: int,
    fused_count: int,
    top_scores: list[float],
) -> None:
    logger.info(
        "retrieval_metrics",
        semantic_count=semantic_count,
        lexical_count=lexical_count,
        fused_count=fused_count,
        top_scores=[round(s, 4) for s in top_scores[:5]],
    )


def log_generation_metrics(trace_id: str, streaming: bool, answer_len: int, fragments: int) -> None:
    logger.info(
        "generation_metrics",
        trace_id=trace_id,
        streaming=streaming,
        answer_len=answer_len,
        fragments=fragments,
    )


def log_latency(trace_id: str, stage: str, duration_ms: float) -> None:
    logger.info(
        "latency",
        trace_id=trace_id,
        stage=stage,
        duration_ms=round(duration_ms, 2),
    )
