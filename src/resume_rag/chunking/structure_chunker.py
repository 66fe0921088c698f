"""Structure-aware chunker: headings, then paragraphs, then sentences."""

from __future__ import annotations

import re

import tiktoken

from resume_rag.config.constants import TIKTOKEN_ENCODING
from resume_rag.models.domain import Chunk

_HEADING = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)


class StructureChunker:
    """Splits text into chunks no longer than ``max_tokens``.

    A résumé section that fits the budget becomes one chunk; larger sections
    fall back to paragraphs and then to sentence packing. Chunk ids follow
    reading order starting at 0.
    """

    def __init__(self, max_tokens: int = 512, overlap_pct: float = 0.0) -> None:
        if max_tokens < 1:
            raise ValueError("max_tokens must be positive")
        self._max_tokens = max_tokens
        self._overlap_pct = overlap_pct
        self._enc = tiktoken.get_encoding(TIKTOKEN_ENCODING)

    def chunk(self, text: str, metadata: dict) -> list[Chunk]:
        pieces: list[tuple[list[str], str]] = []
        for heading_path, section in self._split_by_headings(text):
            for piece in self._fit(section):
                pieces.append((heading_path, piece))

        chunks: list[Chunk] = []
        prev_text = ""
        for heading_path, piece in pieces:
            body = piece
            overlap = self._overlap(prev_text)
            if overlap:
                body = overlap + "\n" + piece
            prev_text = piece
            chunks.append(
                Chunk(
                    chunk_id=len(chunks),
                    text=body,
                    metadata={
                        **metadata,
                        "heading_path": heading_path,
                        "token_count": self._count_tokens(body),
                    },
                )
            )
        return chunks

    def _fit(self, section: str) -> list[str]:
        section = section.strip()
        if not section:
            return []
        if self._count_tokens(section) <= self._max_tokens:
            return [section]

        out: list[str] = []
        for para in self._split_by_paragraphs(section):
            if self._count_tokens(para) <= self._max_tokens:
                out.append(para.strip())
                continue
            buffer = ""
            for sent in self._split_by_sentences(para):
                candidate = f"{buffer} {sent}".strip() if buffer else sent
                if self._count_tokens(candidate) <= self._max_tokens or not buffer:
                    buffer = candidate
                else:
                    out.append(buffer.strip())
                    buffer = sent
            if buffer.strip():
                out.append(buffer.strip())
        return out

    def _overlap(self, prev_text: str) -> str:
        """Trailing words of the previous chunk to prepend to the next one."""
        if self._overlap_pct <= 0 or not prev_text:
            return ""
        words = prev_text.split()
        count = max(1, int(len(words) * self._overlap_pct))
        return " ".join(words[-count:])

    def _count_tokens(self, text: str) -> int:
        return len(self._enc.encode(text))

    @staticmethod
    def _split_by_headings(text: str) -> list[tuple[list[str], str]]:
        """Split by markdown headings; the heading line stays with its section."""
        sections: list[tuple[list[str], str]] = []
        heading_stack: list[str] = []
        last_start = 0
        current_path: list[str] = []

        for match in _HEADING.finditer(text):
            if match.start() > last_start:
                body = text[last_start : match.start()]
                if body.strip():
                    sections.append((list(current_path), body))
            level = len(match.group(1))
            heading_stack = heading_stack[: level - 1] + [match.group(2).strip()]
            current_path = list(heading_stack)
            last_start = match.start()

        tail = text[last_start:]
        if tail.strip():
            sections.append((list(current_path), tail))
        return sections

    @staticmethod
    def _split_by_paragraphs(text: str) -> list[str]:
        return [p for p in re.split(r"\n\s*\n", text) if p.strip()]

    @staticmethod
    def _split_by_sentences(text: str) -> list[str]:
        return [s for s in re.split(r"(?<=[.!?])\s+", text) if s.strip()]
