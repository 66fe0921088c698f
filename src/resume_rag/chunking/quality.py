"""Post-chunking quality checks: garbage filtering and near-duplicate detection."""

from __future__ import annotations

import re

from datasketch import MinHash, MinHashLSH

from resume_rag.config.constants import (
    MAX_REPETITION_RATIO,
    MAX_NUMERIC_TOKEN_LEN,
    MIN_REPETITION_WORDS,
    MINHASH_NUM_PERM,
    NEAR_DUP_SIMILARITY_THRESHOLD,
)
from resume_rag.models.domain import Chunk
from resume_rag.observability.logger import get_logger

logger = get_logger("chunk_quality")

_HEADING_LINE = re.compile(r"^\s*#{1,6}\s+\S")


def is_garbage(text: str) -> bool:
    """A bare heading, a separator or page-number line, or a wall of one repeated word.

    Length alone never disqualifies a chunk: a one-line résumé section such as
    "## Languages\nKorean" is real content.
    """
    body = [line for line in text.strip().splitlines() if not _HEADING_LINE.match(line)]
    words = " ".join(body).split()
    has_letters = any(c.isalpha() for w in words for c in w)
    has_number = any(
        len(w) > MAX_NUMERIC_TOKEN_LEN and any(c.isdigit() for c in w) for w in words
    )
    if not (has_letters or has_number):
        return True
    return len(words) >= MIN_REPETITION_WORDS and len(set(words)) / len(words) < MAX_REPETITION_RATIO


def filter_garbage_chunks(chunks: list[Chunk]) -> list[Chunk]:
    filtered = [c for c in chunks if not is_garbage(c.text)]
    removed = len(chunks) - len(filtered)
    if removed:
        logger.info("garbage_filtered", removed=removed, remaining=len(filtered))
    return filtered


def detect_near_duplicates(chunks: list[Chunk]) -> list[tuple[int, int]]:
    """Return (lower_id, higher_id) pairs whose word sets are near-identical."""
    if len(chunks) < 2:
        return []

    lsh = MinHashLSH(threshold=NEAR_DUP_SIMILARITY_THRESHOLD, num_perm=MINHASH_NUM_PERM)
    minhashes: dict[int, MinHash] = {}
    for chunk in chunks:
        mh = MinHash(num_perm=MINHASH_NUM_PERM)
        for word in set(re.findall(r"\w+", chunk.text.lower())):
            mh.update(word.encode("utf-8"))
        minhashes[chunk.chunk_id] = mh
        lsh.insert(str(chunk.chunk_id), mh)

    pairs: set[tuple[int, int]] = set()
    for chunk_id, mh in minhashes.items():
        for candidate in lsh.query(mh):
            other = int(candidate)
            if other != chunk_id:
                pairs.add((min(chunk_id, other), max(chunk_id, other)))

    duplicates = sorted(pairs)
    if duplicates:
        logger.warning("near_duplicates_found", count=len(duplicates), pairs=duplicates[:10])
    return duplicates
