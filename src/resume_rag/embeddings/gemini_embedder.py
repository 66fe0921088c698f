"""Google Gemini embedding provider using the google-genai SDK."""

from __future__ import annotations

from google import genai
from google.genai import types

from resume_rag.exceptions import EmbeddingError
from resume_rag.observability.logger import get_logger

logger = get_logger("embeddings.gemini")


class GeminiEmbedder:
    """Documents and queries are embedded with their matching task types."""

    def __init__(
        self,
        api_key: str,
        model: str = "text-embedding-004",
        batch_size: int = 100,
        timeout_s: float = 30.0,
    ) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
        )
        self._model = model
        self._batch_size = batch_size

    @property
    def model(self) -> str:
        return self._model

    async def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []
        all_embeddings: list[list[float]] = []
        config = types.EmbedContentConfig(task_type="RETRIEVAL_DOCUMENT")
        try:
            for i in range(0, len(texts), self._batch_size):
                batch = texts[i : i + self._batch_size]
                response = await self._client.aio.models.embed_content(
                    model=self._model, contents=batch, config=config
                )
                all_embeddings.extend(list(e.values) for e in response.embeddings)
            logger.info("embedded_texts", count=len(texts), model=self._model)
        except Exception as e:
            raise EmbeddingError(f"Failed to embed {len(texts)} texts: {e}") from e
        return all_embeddings

    async def embed_query(self, query: str) -> list[float]:
        config = types.EmbedContentConfig(task_type="RETRIEVAL_QUERY")
        try:
            response = await self._client.aio.models.embed_content(
                model=self._model, contents=query, config=config
            )
            return list(response.embeddings[0].values)
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}") from e
