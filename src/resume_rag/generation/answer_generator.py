"""Grounded answer generation from retrieved résumé context."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable

from resume_rag.exceptions import EmptyGeneration
from resume_rag.generation.prompt_templates import render_answer_prompt
from resume_rag.models.domain import GenerationRequest, ModelTier
from resume_rag.observability.logger import get_logger
from resume_rag.protocols.llm import LLMProvider

logger = get_logger("generation")


class AnswerGenerator:
    def __init__(
        self,
        llm: LLMProvider,
        interviewee_name: str,
        refusal_message: str,
        model: ModelTier = ModelTier.PRIMARY,
    ) -> None:
        self._llm = llm
        self._name = interviewee_name
        self._refusal = refusal_message
        self._model = model

    def build_request(self, context: str, question: str, streaming: bool) -> GenerationRequest:
        return GenerationRequest(
            refined_question=question,
            context=context,
            streaming=streaming,
            model=self._model,
        )

    def generate(
        self, context: str, question: str, streaming: bool = False
    ) -> Awaitable[str] | AsyncGenerator[str, None]:
        """Dispatch on ``streaming``.

        Returns an awaitable answer string when not streaming, otherwise a fresh
        single-pass async iterator of non-blank fragments.
        """
        request = self.build_request(context, question, streaming)
        if streaming:
            return self.stream(request)
        return self.complete(request)

    async def complete(self, request: GenerationRequest) -> str:
        answer = await self._llm.generate(self._prompt(request), model=request.model)
        if not answer.strip():
            raise EmptyGeneration("Model returned an empty answer")
        logger.info(
            "generated_answer",
            question_len=len(request.refined_question),
            answer_len=len(answer),
        )
        return answer

    async def stream(self, request: GenerationRequest) -> AsyncGenerator[str, None]:
        fragments = self._llm.generate_stream(self._prompt(request), model=request.model)
        count = 0
        total = 0
        try:
            async for fragment in fragments:
                if not fragment or not fragment.strip():
                    continue
                count += 1
                total += len(fragment)
                yield fragment
        finally:
            # Propagates consumer cancellation down to the provider stream.
            await fragments.aclose()
            logger.info("generated_answer_stream", fragments=count, answer_len=total)

    def _prompt(self, request: GenerationRequest) -> str:
        return render_answer_prompt(
            context=request.context,
            question=request.refined_question,
            name=self._name,
            refusal=self._refusal,
        )
