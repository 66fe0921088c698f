"""Google Gemini LLM provider using the google-genai SDK."""

from __future__ import annotations

from collections.abc import AsyncGenerator

from google import genai
from google.genai import types

from resume_rag.exceptions import GenerationError
from resume_rag.models.domain import ModelTier
from resume_rag.observability.logger import get_logger

logger = get_logger("gemini")


class GeminiProvider:
    """One client serving a fixed primary/lite model pair."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        lite_model: str = "gemini-2.0-flash-lite",
        temperature: float = 0.0,
        max_tokens: int = 2048,
        timeout_s: float = 30.0,
    ) -> None:
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=int(timeout_s * 1000)),
        )
        self._models = {ModelTier.PRIMARY: model, ModelTier.LITE: lite_model}
        self._temperature = temperature
        self._max_tokens = max_tokens

    def _config(self, system: str | None) -> types.GenerateContentConfig:
        config = types.GenerateContentConfig(
            temperature=self._temperature,
            max_output_tokens=self._max_tokens,
        )
        if system:
            config.system_instruction = system
        return config

    async def generate(
        self,
        prompt: str,
        system: str | None = None,
        model: ModelTier = ModelTier.PRIMARY,
    ) -> str:
        try:
            response = await self._client.aio.models.generate_content(
                model=self._models[model],
                contents=prompt,
                config=self._config(system),
            )
            return response.text or ""
        except Exception as e:
            raise GenerationError(f"Gemini generation failed: {e}") from e

    async def generate_stream(
        self,
        prompt: str,
        system: str | None = None,
        model: ModelTier = ModelTier.PRIMARY,
    ) -> AsyncGenerator[str, None]:
        """Yield text fragments as Gemini produces them.

        Closing this generator early closes the underlying response stream.
        """
        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self._models[model],
                contents=prompt,
                config=self._config(system),
            )
        except Exception as e:
            raise GenerationError(f"Gemini stream could not be opened: {e}") from e

        try:
            async for chunk in stream:
                if chunk.text:
                    yield chunk.text
        except Exception as e:
            raise GenerationError(f"Gemini stream failed: {e}") from e
        finally:
            aclose = getattr(stream, "aclose", None)
            if aclose is not None:
                await aclose()
