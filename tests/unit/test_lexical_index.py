"""Tests for the BM25 lexical index."""

from resume_rag.keyword_search.lexical_index import LexicalIndex
from resume_rag.models.domain import Chunk, RetrievalSource


def _index(texts, min_score=None):
    index = LexicalIndex(min_score=min_score)
    index.build([Chunk(chunk_id=i, text=t) for i, t in enumerate(texts)])
    return index


def test_ranks_matching_chunk_first():
    index = _index(["Skilled in TypeScript and React", "Led a team of 4", "Enjoys hiking"])
    results = index.retrieve("TypeScript experience", k=10)
    assert results[0].chunk.chunk_id == 0
    assert results[0].score > results[1].score
    assert all(r.source is RetrievalSource.LEXICAL for r in results)


def test_rare_term_wins_in_two_chunk_corpus():
    index = _index(["Enjoys hiking in the mountains", "Skilled in TypeScript and React"])
    results = index.retrieve("TypeScript", k=10)
    assert [r.chunk.chunk_id for r in results] == [1, 0]
    assert results[0].score > 0.0
    assert results[1].score == 0.0


def test_term_in_most_chunks_still_counts():
    index = _index(["React hooks", "React Native apps", "Enjoys hiking"])
    results = index.retrieve("react", k=10)
    assert {r.chunk.chunk_id for r in results[:2]} == {0, 1}
    assert results[1].score > results[2].score == 0.0


def test_k_at_least_corpus_returns_everything(sample_chunks):
    index = LexicalIndex()
    index.build(sample_chunks)
    results = index.retrieve("hiking", k=10)
    assert sorted(r.chunk.chunk_id for r in results) == [0, 1, 2]


def test_k_smaller_than_corpus_truncates(sample_chunks):
    index = LexicalIndex()
    index.build(sample_chunks)
    assert len(index.retrieve("team", k=2)) == 2


def test_equal_scores_keep_reading_order(sample_chunks):
    index = LexicalIndex()
    index.build(sample_chunks)
    results = index.retrieve("What programming languages?", k=10)
    assert [r.chunk.chunk_id for r in results] == [0, 1, 2]
    assert all(r.score == 0.0 for r in results)


def test_min_score_drops_non_matching_chunks():
    index = _index(["Python and Django", "Kubernetes operator", "Enjoys hiking"], min_score=1e-9)
    results = index.retrieve("kubernetes", k=10)
    assert [r.chunk.chunk_id for r in results] == [1]
    assert index.retrieve("gardening", k=10) == []


def test_empty_index_returns_nothing():
    index = LexicalIndex()
    index.build([])
    assert index.retrieve("anything", k=10) == []
    assert index.size == 0


def test_all_stopword_corpus_does_not_fail():
    index = _index(["the and of", "a an is"])
    results = index.retrieve("the", k=5)
    assert [r.chunk.chunk_id for r in results] == [0, 1]
