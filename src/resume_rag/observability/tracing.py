"""Per-question tracing: timed pipeline stages logged as structured events."""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from uuid import uuid4

from resume_rag.observability.metrics import log_latency


@dataclass
class Span:
    stage: str
    start_ms: float
    end_ms: float = 0.0
    error: str | None = None

    @property
    def duration_ms(self) -> float:
        return self.end_ms - self.start_ms


class TraceContext:
    """Collects one span per pipeline stage (refine, retrieve, generate)."""

    def __init__(self, trace_id: str | None = None) -> None:
        self.trace_id = trace_id or uuid4().hex
        self.spans: list[Span] = []
        self._t0 = time.monotonic()

    def _now_ms(self) -> float:
        return (time.monotonic() - self._t0) * 1000

    @contextmanager
    def span(self, stage: str):
        s = Span(stage=stage, start_ms=self._now_ms())
        try:
            yield s
        except Exception as e:
            s.error = type(e).__name__
            raise
        finally:
            s.end_ms = self._now_ms()
            self.spans.append(s)
            log_latency(self.trace_id, stage, s.duration_ms)

    @property
    def elapsed_ms(self) -> float:
        return self._now_ms()

    @property
    def failed_stage(self) -> str | None:
        return next((s.stage for s in self.spans if s.error), None)

    def summary(self) -> dict:
        return {
            "trace_id": self.trace_id,
            "latency_ms": round(self.elapsed_ms, 2),
            "stages": {s.stage: round(s.duration_ms, 2) for s in self.spans},
        }
