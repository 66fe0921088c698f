"""Document loader: parse -> chunk -> quality filter -> reading-order ids."""

from __future__ import annotations

from dataclasses import replace
from pathlib import Path

from resume_rag.chunking.quality import detect_near_duplicates, filter_garbage_chunks
from resume_rag.exceptions import IngestionError
from resume_rag.ingestion.parser_registry import ParserRegistry, create_default_registry
from resume_rag.models.domain import Chunk
from resume_rag.observability.logger import get_logger
from resume_rag.protocols.chunker import Chunker

logger = get_logger("ingestion")


class DocumentLoader:
    def __init__(self, chunker: Chunker, parser_registry: ParserRegistry | None = None) -> None:
        self._chunker = chunker
        self._parsers = parser_registry or create_default_registry()

    def load(self, source_path: str | Path) -> list[Chunk]:
        """Return the document's chunks in reading order with ids 0..n-1.

        Raises:
            IngestionError: the file is missing or unreadable, or yields no chunks.
        """
        path = Path(source_path)
        if not path.is_file():
            raise IngestionError(f"Source document not found: {path}")

        parser = self._parsers.get_parser(path)
        raw_text, metadata = parser.parse(path, {"source": str(path)})
        logger.info("parsed", source=str(path), chars=len(raw_text))

        chunks = filter_garbage_chunks(self._chunker.chunk(raw_text, metadata))
        if not chunks:
            raise IngestionError(f"No extractable text in {path}")

        # Filtering leaves gaps; ids must stay contiguous in reading order.
        chunks = [replace(c, chunk_id=i) for i, c in enumerate(chunks)]
        detect_near_duplicates(chunks)

        logger.info("document_loaded", source=str(path), chunks=len(chunks))
        return chunks
