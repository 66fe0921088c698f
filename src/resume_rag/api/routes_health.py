"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from resume_rag.api.dependencies import get_session
from resume_rag.models.domain import SessionState
from resume_rag.models.schemas import HealthResponse
from resume_rag.pipeline.chatbot_session import ChatbotSession

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(session: ChatbotSession = Depends(get_session)) -> HealthResponse:
    return HealthResponse(
        status="degraded" if session.state is SessionState.FAILED else "ok",
        session_state=session.state.value,
        chunk_count=session.chunk_count,
    )
