"""PDF résumé parser using PyMuPDF4LLM for structured (markdown) extraction."""

from __future__ import annotations

from pathlib import Path

import pymupdf
import pymupdf4llm

from resume_rag.exceptions import ParsingError
from resume_rag.observability.logger import get_logger

logger = get_logger("parser_pdf")


class PDFParser:
    @property
    def supported_extensions(self) -> list[str]:
        return [".pdf"]

    def parse(self, file_path: str | Path, metadata: dict) -> tuple[str, dict]:
        file_path = Path(file_path)
        try:
            with pymupdf.open(str(file_path)) as doc:
                pdf_meta = doc.metadata or {}
                page_count = doc.page_count
                pages = pymupdf4llm.to_markdown(doc, page_chunks=True)
        except Exception as e:
            raise ParsingError(f"Could not read PDF {file_path}: {e}") from e

        # Pages keep their own paragraph boundary so chunks never straddle a page break.
        text = "\n\n".join(page["text"].strip() for page in pages if page["text"].strip())

        enriched = {**metadata, "page_count": page_count}
        for key in ("title", "author"):
            if pdf_meta.get(key):
                enriched[key] = pdf_meta[key]
        logger.debug("pdf_parsed", path=str(file_path), pages=page_count, chars=len(text))
        return text, enriched
