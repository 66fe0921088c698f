"""Registry mapping file extensions to parsers."""

from __future__ import annotations

from pathlib import Path

from resume_rag.exceptions import ParsingError
from resume_rag.ingestion.parser_markdown import MarkdownParser
from resume_rag.ingestion.parser_pdf import PDFParser
from resume_rag.ingestion.parser_text import TextParser
from resume_rag.protocols.ingestion import FileParser


class ParserRegistry:
    def __init__(self) -> None:
        self._parsers: dict[str, FileParser] = {}

    def register(self, parser: FileParser) -> None:
        for ext in parser.supported_extensions:
            self._parsers[ext.lower()] = parser

    def get_parser(self, filename: str | Path) -> FileParser:
        ext = Path(filename).suffix.lower()
        parser = self._parsers.get(ext)
        if parser is None:
            raise ParsingError(
                f"No parser registered for extension '{ext}'. "
                f"Supported: {sorted(self._parsers)}"
            )
        return parser


def create_default_registry() -> ParserRegistry:
    registry = ParserRegistry()
    for parser in (PDFParser(), TextParser(), MarkdownParser()):
        registry.register(parser)
    return registry
