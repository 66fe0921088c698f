"""HTTP tests for the /me chat endpoint and /health."""

import json

import pytest
from fastapi.testclient import TestClient

from resume_rag.api.app import create_app
from resume_rag.exceptions import GenerationError

from conftest import FakeLLM, FakeLoader


def _sse_events(body: str) -> list[dict]:
    return [
        json.loads(line[len("data: "):])
        for line in body.splitlines()
        if line.startswith("data: ")
    ]


@pytest.fixture
def client_for(settings, make_session):
    def _client(**session_kwargs):
        return TestClient(create_app(settings, session=make_session(**session_kwargs)))

    return _client


def test_status(client_for):
    with client_for() as client:
        resp = client.get("/me")
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["message"] == "RAG Chatbot API is ready"
    assert data["methods"] == ["GET", "POST"]


def test_ask_returns_answer(client_for):
    with client_for() as client:
        resp = client.post("/me", json={"message": "What programming languages?"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["success"] is True
    assert data["question"] == "What programming languages?"
    assert "TypeScript" in data["answer"]
    assert "timestamp" in data
    assert "X-Request-ID" in resp.headers


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}])
def test_missing_message_is_rejected(client_for, body):
    with client_for() as client:
        resp = client.post("/me", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"success": False, "error": "Please enter a message."}


def test_stream_emits_chunks_then_done(client_for):
    with client_for() as client:
        resp = client.post("/me?stream=true", json={"message": "What programming languages?"})
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/event-stream")

    events = _sse_events(resp.text)
    assert [e["type"] for e in events[:-1]] == ["chunk"] * (len(events) - 1)
    assert events[-1]["type"] == "done"
    assert "content" not in events[-1]
    assert "TypeScript" in "".join(e["content"] for e in events[:-1])


def test_stream_failure_arrives_as_chunk_then_done(client_for, settings):
    llm = FakeLLM(answer_error=GenerationError("boom"), stream_error_after=1)
    with client_for(llm=llm) as client:
        resp = client.post("/me?stream=true", json={"message": "What programming languages?"})
    events = _sse_events(resp.text)
    assert [e["type"] for e in events] == ["chunk", "chunk", "done"]
    assert events[1]["content"] == settings.generic_error_message


def test_failed_session_answers_with_generic_message(client_for, settings):
    with client_for(loader=FakeLoader(fail_times=5)) as client:
        resp = client.post("/me", json={"message": "Hello?"})
        health = client.get("/health").json()
    assert resp.status_code == 200
    assert resp.json()["answer"] == settings.generic_error_message
    assert health == {"status": "degraded", "session_state": "failed", "chunk_count": 0}


def test_health_after_warm_start(client_for, settings):
    settings.warm_start = True
    with client_for() as client:
        data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["session_state"] == "ready"
    assert data["chunk_count"] == 3
