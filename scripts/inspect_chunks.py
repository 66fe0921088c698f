"""Load the résumé and show its chunks and BM25 hits without calling any model."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from resume_rag.chunking.structure_chunker import StructureChunker
from resume_rag.config.settings import Settings
from resume_rag.ingestion.loader import DocumentLoader
from resume_rag.keyword_search.lexical_index import LexicalIndex


def main(path: str | None, query: str | None) -> None:
    settings = Settings()
    loader = DocumentLoader(
        StructureChunker(
            max_tokens=settings.chunk_max_tokens,
            overlap_pct=settings.chunk_overlap_pct,
        )
    )
    chunks = loader.load(path or settings.resume_path)
    print(f"Loaded {len(chunks)} chunks")
    for chunk in chunks:
        heading = " > ".join(chunk.metadata.get("heading_path", [])) or "-"
        preview = chunk.text.replace("\n", " ")[:80]
        print(f"[{chunk.chunk_id:3d}] ({heading}) {preview}")

    if query:
        index = LexicalIndex(min_score=settings.lexical_min_score)
        index.build(chunks)
        print(f"\nBM25 top {settings.retrieval_k} for: {query}")
        for hit in index.retrieve(query, settings.retrieval_k):
            print(f"  {hit.score:8.4f}  [{hit.chunk.chunk_id}]")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--path", help="résumé file (defaults to RAG_RESUME_PATH)")
    parser.add_argument("--query", help="optional keyword query to rank chunks by")
    args = parser.parse_args()
    main(args.path, args.query)
