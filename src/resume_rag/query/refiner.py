"""Question refinement: one model call rewriting the question for retrieval."""

from __future__ import annotations

import re
import unicodedata

from resume_rag.config.constants import REFINER_FORBIDDEN_CHARS
from resume_rag.generation.prompt_templates import QUESTION_REFINEMENT_PROMPT
from resume_rag.models.domain import ModelTier
from resume_rag.observability.logger import get_logger
from resume_rag.protocols.llm import LLMProvider

logger = get_logger("query_refiner")

_FORBIDDEN = re.compile(f"[{re.escape(REFINER_FORBIDDEN_CHARS)}]")
_ANSWER_LABEL = re.compile(r"^\s*improved question\s*:\s*", re.IGNORECASE)


class QueryRefiner:
    """Never blocks answering: any failure falls back to the original question."""

    def __init__(
        self,
        llm: LLMProvider,
        role: str,
        model: ModelTier = ModelTier.LITE,
        enabled: bool = True,
    ) -> None:
        self._llm = llm
        self._role = role
        self._model = model
        self._enabled = enabled

    async def refine(self, question: str) -> str:
        if not self._enabled or not question.strip():
            return question

        prompt = QUESTION_REFINEMENT_PROMPT.format(role=self._role, question=question)
        try:
            raw = await self._llm.generate(prompt, model=self._model)
        except Exception as e:
            logger.warning("refinement_failed", error=str(e), question=question)
            return question

        refined = self._clean(raw or "")
        if not refined:
            logger.warning("refinement_empty", question=question)
            return question

        logger.info("question_refined", original=question, refined=refined)
        return refined

    @staticmethod
    def _clean(text: str) -> str:
        text = unicodedata.normalize("NFKC", text)
        text = _ANSWER_LABEL.sub("", text)
        text = _FORBIDDEN.sub(" ", text)
        text = re.sub(r"\s+", " ", text).strip()
        return text.strip("\"'").strip()
