"""SQLite-backed embedding cache so a restarted process does not re-embed the résumé."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path

import aiosqlite

CREATE_CACHE_TABLE = """
CREATE TABLE IF NOT EXISTS embedding_cache (
    namespace TEXT NOT NULL,
    text_hash TEXT NOT NULL,
    embedding TEXT NOT NULL,
    PRIMARY KEY (namespace, text_hash)
)
"""


class EmbeddingCache:
    """Entries are partitioned by namespace (model name plus document/query role)."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    async def initialize(self) -> None:
        Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(self._db_path) as db:
            await db.execute(CREATE_CACHE_TABLE)
            await db.commit()

    async def get_batch(self, namespace: str, texts: list[str]) -> dict[int, list[float]]:
        """Return {index: embedding} for texts that are cached."""
        if not texts:
            return {}
        hash_to_indices: dict[str, list[int]] = {}
        for i, text in enumerate(texts):
            hash_to_indices.setdefault(self._hash(text), []).append(i)
        placeholders = ",".join("?" for _ in hash_to_indices)

        result: dict[int, list[float]] = {}
        async with aiosqlite.connect(self._db_path) as db:
            async with db.execute(
                "SELECT text_hash, embedding FROM embedding_cache "
                f"WHERE namespace = ? AND text_hash IN ({placeholders})",
                [namespace, *hash_to_indices],
            ) as cursor:
                async for text_hash, raw in cursor:
                    embedding = json.loads(raw)
                    for idx in hash_to_indices.get(text_hash, []):
                        result[idx] = embedding
        return result

    async def put_batch(
        self, namespace: str, texts: list[str], embeddings: list[list[float]]
    ) -> None:
        if not texts:
            return
        rows = [
            (namespace, self._hash(t), json.dumps(e)) for t, e in zip(texts, embeddings)
        ]
        async with aiosqlite.connect(self._db_path) as db:
            await db.executemany(
                "INSERT OR REPLACE INTO embedding_cache (namespace, text_hash, embedding) "
                "VALUES (?, ?, ?)",
                rows,
            )
            await db.commit()

    @staticmethod
    def _hash(text: str) -> str:
        return hashlib.sha256(text.encode("utf-8")).hexdigest()
