"""Shared test fixtures and deterministic fakes for the embedder, LLM and loader."""

from __future__ import annotations

import re

import pytest

from resume_rag.config.settings import Settings
from resume_rag.exceptions import IngestionError
from resume_rag.generation.answer_generator import AnswerGenerator
from resume_rag.models.domain import Chunk, ModelTier
from resume_rag.pipeline.chatbot_session import ChatbotSession
from resume_rag.query.refiner import QueryRefiner

RESUME_TEXTS = ["Skilled in TypeScript", "Led a team of 4", "Enjoys hiking"]

# Each embedding dimension is one topic; the last one is a small bias so no vector is zero.
TOPICS = {
    "tech": {"typescript", "programming", "languages", "language", "python", "react"},
    "team": {"team", "led", "lead", "leadership", "people"},
    "hobby": {"hiking", "enjoys", "hobbies", "hobby", "outdoors"},
}


class FakeEmbedder:
    """Bag-of-topics embedder that counts provider calls."""

    def __init__(self) -> None:
        self.embed_texts_calls = 0
        self.embed_query_calls = 0

    @staticmethod
    def vector(text: str) -> list[float]:
        words = re.findall(r"\w+", text.lower())
        return [float(sum(w in vocab for w in words)) for vocab in TOPICS.values()] + [0.01]

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.embed_texts_calls += 1
        return [self.vector(t) for t in texts]

    async def embed_query(self, query: str) -> list[float]:
        self.embed_query_calls += 1
        return self.vector(query)


class FakeLLM:
    """Deterministic model stub.

    Refinement prompts get ``refined`` (or the original question echoed back).
    Answer prompts echo the related documents unless ``answer`` is given.
    Streams split the same answer into word fragments.
    """

    def __init__(
        self,
        answer: str | None = None,
        refined: str | None = None,
        refine_error: Exception | None = None,
        answer_error: Exception | None = None,
        stream_error_after: int | None = None,
    ) -> None:
        self.answer = answer
        self.refined = refined
        self.refine_error = refine_error
        self.answer_error = answer_error
        self.stream_error_after = stream_error_after
        self.refine_calls = 0
        self.answer_calls = 0
        self.stream_calls = 0
        self.stream_closed = 0
        self.prompts: list[str] = []
        self.models: list[ModelTier] = []

    @staticmethod
    def is_refinement(prompt: str) -> bool:
        return "Improved question:" in prompt

    def _answer_for(self, prompt: str) -> str:
        if self.answer is not None:
            return self.answer
        match = re.search(r"Related documents:\n(.*)\nQuestion:", prompt, re.DOTALL)
        return match.group(1) if match else ""

    async def generate(self, prompt, system=None, model=ModelTier.PRIMARY) -> str:
        self.prompts.append(prompt)
        self.models.append(model)
        if self.is_refinement(prompt):
            self.refine_calls += 1
            if self.refine_error is not None:
                raise self.refine_error
            if self.refined is not None:
                return self.refined
            return re.search(r"Original question: (.*)", prompt).group(1)
        self.answer_calls += 1
        if self.answer_error is not None:
            raise self.answer_error
        return self._answer_for(prompt)

    async def generate_stream(self, prompt, system=None, model=ModelTier.PRIMARY):
        self.prompts.append(prompt)
        self.models.append(model)
        self.stream_calls += 1
        try:
            if self.answer_error is not None and self.stream_error_after is None:
                raise self.answer_error
            for i, fragment in enumerate(re.findall(r"\S+\s*", self._answer_for(prompt))):
                if self.stream_error_after is not None and i == self.stream_error_after:
                    raise self.answer_error
                yield fragment
        finally:
            self.stream_closed += 1


class FakeLoader:
    """DocumentLoader stand-in that counts loads and can fail the first N of them."""

    def __init__(self, texts: list[str] | None = None, fail_times: int = 0) -> None:
        self.texts = RESUME_TEXTS if texts is None else texts
        self.fail_times = fail_times
        self.load_calls = 0

    def load(self, source_path) -> list[Chunk]:
        self.load_calls += 1
        if self.load_calls <= self.fail_times:
            raise IngestionError(f"cannot read {source_path}")
        return [Chunk(chunk_id=i, text=t) for i, t in enumerate(self.texts)]


@pytest.fixture
def settings(tmp_path):
    """Test settings with no network-backed paths."""
    return Settings(
        openai_api_key="test-key",
        google_api_key="test-key",
        resume_path=str(tmp_path / "resume.pdf"),
        embedding_cache_db_path="",
    )


@pytest.fixture
def sample_chunks():
    return [Chunk(chunk_id=i, text=t) for i, t in enumerate(RESUME_TEXTS)]


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def fake_loader():
    return FakeLoader()


@pytest.fixture
def make_session(settings):
    """Factory building a ChatbotSession from fakes; override any piece by keyword."""

    def _make(
        llm: FakeLLM | None = None,
        loader: FakeLoader | None = None,
        embedder: FakeEmbedder | None = None,
        settings_override: Settings | None = None,
    ) -> ChatbotSession:
        s = settings_override or settings
        llm = llm or FakeLLM()
        return ChatbotSession(
            settings=s,
            loader=loader or FakeLoader(),
            embedder=embedder or FakeEmbedder(),
            refiner=QueryRefiner(llm, role=s.interviewee_role),
            generator=AnswerGenerator(
                llm,
                interviewee_name=s.interviewee_name,
                refusal_message=s.refusal_message,
            ),
        )

    return _make
