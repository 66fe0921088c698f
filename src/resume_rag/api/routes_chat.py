"""Chat endpoint: one-shot JSON answers or Server-Sent Events streaming."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse

from resume_rag.api.dependencies import get_session
from resume_rag.models.schemas import AskRequest, AskResponse, StatusResponse, StreamEvent
from resume_rag.observability.logger import get_logger
from resume_rag.pipeline.chatbot_session import ChatbotSession

logger = get_logger("routes_chat")

router = APIRouter()

STREAM_ERROR_MESSAGE = "An error occurred while generating the response."


@router.get("/me", response_model=StatusResponse)
async def status() -> StatusResponse:
    return StatusResponse(
        message="RAG Chatbot API is ready",
        endpoint="/me",
        methods=["GET", "POST"],
    )


@router.post("/me", response_model=AskResponse)
async def ask(
    request: AskRequest,
    stream: bool = Query(default=False),
    session: ChatbotSession = Depends(get_session),
) -> AskResponse | StreamingResponse:
    logger.info("chat_request", stream=stream, message_len=len(request.message))
    if not stream:
        answer = await session.ask(request.message)
        return AskResponse(question=request.message, answer=answer)

    async def event_generator():
        fragments = session.ask_stream(request.message)
        try:
            async for fragment in fragments:
                yield StreamEvent(type="chunk", content=fragment).to_sse()
            yield StreamEvent(type="done").to_sse()
        except Exception as e:
            logger.exception("stream_transport_failed", error=str(e))
            yield StreamEvent(type="error", content=STREAM_ERROR_MESSAGE).to_sse()
        finally:
            await fragments.aclose()

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
