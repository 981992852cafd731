# tests/test_ranker.py
"""Tests for cosine similarity, the spoiler boundary and the relevance ranker."""

import math

import pytest

from chapterwise.exceptions import DataIntegrityError, NoRelevantContentError
from chapterwise.models import Chapter, EmbeddedChapter
from chapterwise.ranker import (
    MIN_SIMILARITY,
    RelevanceRanker,
    cosine_similarity,
    filter_by_boundary,
)


def _ec(order: int, embedding: list[float]) -> EmbeddedChapter:
    return EmbeddedChapter(
        chapter=Chapter(title_id="t", order=order, name=f"Ch {order}"),
        embedding=embedding,
    )


class TestCosineSimilarity:
    def test_identical_vectors(self):
        assert cosine_similarity([1.0, 2.0, 3.0], [1.0, 2.0, 3.0]) == pytest.approx(1.0)

    def test_orthogonal_vectors(self):
        assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)

    def test_opposite_vectors(self):
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_symmetric(self):
        a, b = [0.3, -1.2, 4.0], [2.0, 0.5, -0.7]
        assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_scale_invariant(self):
        assert cosine_similarity([1.0, 1.0], [5.0, 5.0]) == pytest.approx(1.0)

    @pytest.mark.parametrize(
        "a,b",
        [
            ([1e-300, 1e-300], [1e300, 1e300]),
            ([0.1, 0.2, 0.3], [0.1, 0.2, 0.3000000001]),
            ([3.0, -4.0], [-3.0, 4.0]),
        ],
    )
    def test_bounded(self, a, b):
        s = cosine_similarity(a, b)
        assert -1.0 <= s <= 1.0
        assert not math.isnan(s)

    def test_zero_vector_is_minimum(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == MIN_SIMILARITY
        assert cosine_similarity([1.0, 0.0], [0.0, 0.0]) == MIN_SIMILARITY

    def test_dimension_mismatch_raises(self):
        with pytest.raises(DataIntegrityError, match="mismatch"):
            cosine_similarity([1.0, 0.0], [1.0, 0.0, 0.0])


class TestFilterByBoundary:
    def test_keeps_chapters_up_to_limit(self):
        chapters = [_ec(i, [1.0]) for i in range(1, 6)]
        kept = filter_by_boundary(chapters, 3)
        assert [ec.chapter.order for ec in kept] == [1, 2, 3]

    def test_limit_beyond_last_chapter_keeps_all(self):
        chapters = [_ec(i, [1.0]) for i in range(1, 4)]
        assert len(filter_by_boundary(chapters, 99)) == 3

    @pytest.mark.parametrize("limit", [None, 0, -3, True, 2.5, "3"])
    def test_invalid_limit_permits_nothing(self, limit):
        chapters = [_ec(i, [1.0]) for i in range(1, 4)]
        assert filter_by_boundary(chapters, limit) == []


class TestRelevanceRanker:
    def test_top_k_must_be_positive(self):
        with pytest.raises(ValueError):
            RelevanceRanker(top_k=0)

    def test_never_selects_beyond_boundary(self):
        # Chapter 5 is the perfect match but lies past the limit
        chapters = [_ec(1, [0.0, 1.0]), _ec(2, [0.5, 0.5]), _ec(5, [1.0, 0.0])]
        ranked = RelevanceRanker().rank(chapters, 2, [1.0, 0.0])
        assert all(c.chapter.order <= 2 for c in ranked)
        assert [c.chapter.order for c in ranked] == [2, 1]

    def test_sorted_by_similarity_descending(self):
        chapters = [_ec(1, [0.0, 1.0]), _ec(2, [1.0, 0.0]), _ec(3, [1.0, 1.0])]
        ranked = RelevanceRanker().rank(chapters, 3, [1.0, 0.0])
        assert [c.chapter.order for c in ranked] == [2, 3, 1]
        sims = [c.similarity for c in ranked]
        assert sims == sorted(sims, reverse=True)

    def test_output_size_is_min_of_k_and_permitted(self):
        chapters = [_ec(i, [1.0, float(i)]) for i in range(1, 11)]
        assert len(RelevanceRanker(top_k=5).rank(chapters, 10, [1.0, 1.0])) == 5
        assert len(RelevanceRanker(top_k=5).rank(chapters, 3, [1.0, 1.0])) == 3

    def test_ties_broken_by_earlier_chapter(self):
        chapters = [_ec(3, [1.0, 0.0]), _ec(1, [1.0, 0.0]), _ec(2, [1.0, 0.0])]
        ranked = RelevanceRanker(top_k=2).rank(chapters, 3, [1.0, 0.0])
        assert [c.chapter.order for c in ranked] == [1, 2]

    def test_zero_vector_chapter_ranks_last(self):
        chapters = [_ec(1, [0.0, 0.0]), _ec(2, [-1.0, 0.5])]
        ranked = RelevanceRanker().rank(chapters, 2, [1.0, 0.0])
        assert ranked[-1].chapter.order == 1
        assert ranked[-1].similarity == MIN_SIMILARITY

    @pytest.mark.parametrize("limit", [None, 0, -1])
    def test_closed_boundary_raises(self, limit):
        with pytest.raises(NoRelevantContentError):
            RelevanceRanker().rank([_ec(1, [1.0])], limit, [1.0])

    def test_no_chapters_raises(self):
        with pytest.raises(NoRelevantContentError):
            RelevanceRanker().rank([], 5, [1.0])

    def test_dimension_mismatch_propagates(self):
        with pytest.raises(DataIntegrityError):
            RelevanceRanker().rank([_ec(1, [1.0, 0.0])], 1, [1.0, 0.0, 0.0])
