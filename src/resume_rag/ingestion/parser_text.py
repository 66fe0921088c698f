"""Plain text résumé parser with encoding detection."""

from __future__ import annotations

from pathlib import Path

from charset_normalizer import from_path

from resume_rag.exceptions import ParsingError


class TextParser:
    @property
    def supported_extensions(self) -> list[str]:
        return [".txt"]

    def parse(self, file_path: str | Path, metadata: dict) -> tuple[str, dict]:
        file_path = Path(file_path)
        try:
            best = from_path(file_path).best()
            text = str(best) if best else file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParsingError(f"Could not read {file_path}: {e}") from e
        return text, {**metadata, "encoding": best.encoding if best else "utf-8"}
