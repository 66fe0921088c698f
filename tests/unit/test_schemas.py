"""Tests for Pydantic schemas and settings validation."""

import json

import pytest
from pydantic import ValidationError

from resume_rag.config.settings import Settings
from resume_rag.models.schemas import AskRequest, AskResponse, HealthResponse, StreamEvent


def test_ask_request_valid():
    assert AskRequest(message="What is your tech stack?").message == "What is your tech stack?"


@pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "   "}, {"message": 42}])
def test_ask_request_invalid(payload):
    with pytest.raises(ValidationError):
        AskRequest(**payload)


def test_ask_response_serialization():
    data = AskResponse(question="q", answer="a").model_dump()
    assert data["success"] is True
    assert data["timestamp"].tzinfo is not None


def test_stream_event_sse_framing():
    frame = StreamEvent(type="chunk", content="Hello").to_sse()
    assert frame.startswith("data: ") and frame.endswith("\n\n")
    payload = json.loads(frame[len("data: "):])
    assert payload["type"] == "chunk"
    assert payload["content"] == "Hello"
    assert "timestamp" in payload


def test_done_event_has_no_content():
    payload = json.loads(StreamEvent(type="done").to_sse()[len("data: "):])
    assert "content" not in payload


def test_stream_event_invalid_type():
    with pytest.raises(ValidationError):
        StreamEvent(type="progress")


def test_health_response():
    assert HealthResponse(status="ok", session_state="ready", chunk_count=3).status == "ok"


def test_settings_defaults():
    settings = Settings()
    assert settings.retrieval_k == 10
    assert settings.semantic_weight == 0.7
    assert settings.lexical_weight == 0.3


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("RAG_SEMANTIC_WEIGHT", "0.5")
    monkeypatch.setenv("RAG_RETRIEVAL_K", "4")
    settings = Settings()
    assert settings.semantic_weight == 0.5
    assert settings.retrieval_k == 4


def test_settings_reject_negative_weight():
    with pytest.raises(ValidationError):
        Settings(lexical_weight=-1.0)
