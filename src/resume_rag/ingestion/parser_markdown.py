"""Markdown résumé parser."""

from __future__ import annotations

import re
from pathlib import Path

from resume_rag.exceptions import ParsingError

_FRONT_MATTER = re.compile(r"^---\s*\n.*?\n---\s*\n", re.DOTALL)
_TITLE = re.compile(r"^#\s+(.+)$", re.MULTILINE)


class MarkdownParser:
    @property
    def supported_extensions(self) -> list[str]:
        return [".md", ".markdown"]

    def parse(self, file_path: str | Path, metadata: dict) -> tuple[str, dict]:
        file_path = Path(file_path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParsingError(f"Could not read {file_path}: {e}") from e

        text = _FRONT_MATTER.sub("", text, count=1)
        enriched = {**metadata}
        title_match = _TITLE.search(text)
        if title_match:
            enriched["title"] = title_match.group(1).strip()
        return text, enriched
