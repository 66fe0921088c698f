"""FastAPI dependency injection helpers."""

from __future__ import annotations

from fastapi import Request

from resume_rag.pipeline.chatbot_session import ChatbotSession


def get_session(request: Request) -> ChatbotSession:
    return request.app.state.session
