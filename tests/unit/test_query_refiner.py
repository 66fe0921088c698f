"""Tests for question refinement and its fallback policy."""

import pytest

from resume_rag.exceptions import GenerationError
from resume_rag.models.domain import ModelTier
from resume_rag.query.refiner import QueryRefiner

from conftest import FakeLLM


async def test_refined_question_is_returned():
    llm = FakeLLM(refined="Which programming languages and frameworks has the developer used")
    refiner = QueryRefiner(llm, role="frontend developer")
    refined = await refiner.refine("what languages?")
    assert refined == "Which programming languages and frameworks has the developer used"
    assert llm.refine_calls == 1
    assert llm.models == [ModelTier.LITE]


async def test_prompt_contains_question_and_role():
    llm = FakeLLM()
    await QueryRefiner(llm, role="frontend developer").refine("Tell me about {braces}")
    assert "Original question: Tell me about {braces}" in llm.prompts[0]
    assert "frontend developer" in llm.prompts[0]


@pytest.mark.parametrize("question", ["", "   ", "What did you build?", "경력은 어떻게 되나요?"])
async def test_model_failure_returns_original(question):
    llm = FakeLLM(refine_error=GenerationError("quota exceeded"))
    refiner = QueryRefiner(llm, role="frontend developer")
    assert await refiner.refine(question) == question


@pytest.mark.parametrize("response", ["", "   \n ", "###", '""'])
async def test_blank_result_returns_original(response):
    refiner = QueryRefiner(FakeLLM(refined=response), role="frontend developer")
    assert await refiner.refine("What did you build?") == "What did you build?"


async def test_special_characters_are_removed():
    llm = FakeLLM(refined="Improved question: **React/TypeScript** projects & #frontend work")
    refined = await QueryRefiner(llm, role="dev").refine("projects?")
    assert refined == "React TypeScript projects frontend work"


async def test_disabled_refiner_skips_model():
    llm = FakeLLM()
    refiner = QueryRefiner(llm, role="dev", enabled=False)
    assert await refiner.refine("What did you build?") == "What did you build?"
    assert llm.refine_calls == 0
