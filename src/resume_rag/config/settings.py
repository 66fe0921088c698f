"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # API Keys
    openai_api_key: str = ""
    google_api_key: str = ""

    # Source document
    resume_path: str = "public/resume.pdf"

    # Interviewee (the résumé's subject)
    interviewee_name: str = "pathas"
    interviewee_role: str = "frontend developer"

    # Embedding
    embedding_provider: Literal["gemini", "openai"] = "gemini"
    embedding_model: str | None = None  # None picks the provider default
    embedding_batch_size: int = 100
    embedding_cache_db_path: str = ""  # empty disables the SQLite cache

    # LLM / Gemini
    gemini_model: str = "gemini-2.0-flash"
    gemini_lite_model: str = "gemini-2.0-flash-lite"
    gemini_temperature: float = 0.0
    gemini_max_tokens: int = 2048
    llm_timeout_s: float = 30.0

    # Query refinement
    query_refinement_enabled: bool = True
    refine_model: Literal["primary", "lite"] = "lite"

    # Retrieval
    retrieval_k: int = 10
    semantic_weight: float = 0.7
    lexical_weight: float = 0.3
    lexical_min_score: float | None = None
    semantic_min_score: float | None = None

    # Chunking
    chunk_max_tokens: int = 512
    chunk_overlap_pct: float = 0.0

    # User-facing messages
    no_documents_message: str = "I couldn't find any relevant documents."
    no_answer_message: str = "Sorry, I couldn't generate an answer."
    generic_error_message: str = "An error occurred. Please try again."
    refusal_message: str = (
        "I'm sorry, but it's difficult for me to give an appropriate answer to that question."
    )

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    warm_start: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    model_config = {"env_file": ".env", "env_prefix": "RAG_"}

    @field_validator("semantic_weight", "lexical_weight")
    @classmethod
    def _non_negative_weight(cls, v: float) -> float:
        if v < 0:
            raise ValueError("fusion weights must be non-negative")
        return v

    @field_validator("retrieval_k")
    @classmethod
    def _positive_k(cls, v: int) -> int:
        if v < 1:
            raise ValueError("retrieval_k must be at least 1")
        return v
