"""FastAPI application factory with lifespan management."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from resume_rag.api.middleware import RequestContextMiddleware
from resume_rag.api.routes_chat import router as chat_router
from resume_rag.api.routes_health import router as health_router
from resume_rag.config.settings import Settings
from resume_rag.exceptions import ChatbotError
from resume_rag.models.schemas import ErrorResponse
from resume_rag.observability.logger import get_logger, setup_logging
from resume_rag.pipeline.builder import create_session
from resume_rag.pipeline.chatbot_session import ChatbotSession

logger = get_logger("app")


def create_app(
    settings: Settings | None = None,
    session: ChatbotSession | None = None,
) -> FastAPI:
    """Build the app. A prebuilt ``session`` replaces the Gemini-backed one."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app_settings = settings or Settings()
        setup_logging(app_settings.log_level, app_settings.json_logs)

        app.state.settings = app_settings
        app.state.session = session or await create_session(app_settings)

        if app_settings.warm_start:
            try:
                await app.state.session.initialize()
            except ChatbotError as e:
                # The session retries on the first question.
                logger.warning("warm_start_failed", error=str(e))

        logger.info(
            "startup_complete",
            session_state=app.state.session.state.value,
            resume_path=app_settings.resume_path,
        )
        yield
        logger.info("shutdown_complete")

    app = FastAPI(
        title="Resume RAG Chatbot",
        version="1.0.0",
        description="Answers questions about a résumé with hybrid retrieval and Gemini",
        lifespan=lifespan,
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(health_router, tags=["health"])
    app.include_router(chat_router, tags=["chat"])
    return app


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("invalid_request", path=request.url.path, errors=len(exc.errors()))
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Please enter a message.").model_dump(),
    )
