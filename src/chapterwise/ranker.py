"""Relevance ranking of chapters inside the spoiler boundary."""

from collections.abc import Sequence

import numpy as np

from chapterwise.exceptions import DataIntegrityError, NoRelevantContentError
from chapterwise.models import Candidate, EmbeddedChapter

DEFAULT_TOP_K = 5

# Rank given to chapters whose similarity is undefined (zero-norm vectors).
MIN_SIMILARITY = -1.0


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Compute cosine similarity between two vectors of equal length.

    Formula: cos(θ) = (a · b) / (||a|| * ||b||), clipped to [-1, 1] to absorb
    floating point drift.

    A zero vector has no direction, so the similarity is undefined; it is
    reported as MIN_SIMILARITY so such chapters rank last instead of
    producing NaN.

    Raises:
        DataIntegrityError: If the vectors have different lengths.
    """
    a_arr = np.asarray(a, dtype=float)
    b_arr = np.asarray(b, dtype=float)
    if a_arr.shape != b_arr.shape:
        raise DataIntegrityError(
            f"Embedding dimension mismatch: {a_arr.size} vs {b_arr.size}"
        )

    norm_a, norm_b = np.linalg.norm(a_arr), np.linalg.norm(b_arr)
    if norm_a == 0 or norm_b == 0:
        return MIN_SIMILARITY

    similarity = float(np.dot(a_arr, b_arr) / (norm_a * norm_b))
    return min(1.0, max(-1.0, similarity))


def is_valid_chapter_limit(chapter_limit: object) -> bool:
    """True if chapter_limit is a positive integer (bools excluded)."""
    return (
        isinstance(chapter_limit, int)
        and not isinstance(chapter_limit, bool)
        and chapter_limit > 0
    )


def filter_by_boundary(
    chapters: Sequence[EmbeddedChapter],
    chapter_limit: int | None,
) -> list[EmbeddedChapter]:
    """Keep only chapters the reader has already read.

    A missing or non-positive chapter_limit permits no chapters at all.
    """
    if not is_valid_chapter_limit(chapter_limit):
        return []
    assert chapter_limit is not None
    return [ec for ec in chapters if ec.chapter.order <= chapter_limit]


class RelevanceRanker:
    """Scores boundary-permitted chapters against a question and keeps the top K."""

    def __init__(self, top_k: int = DEFAULT_TOP_K) -> None:
        """Initialize the ranker.

        Args:
            top_k: Maximum number of chapters to select (>= 1).
        """
        if top_k < 1:
            raise ValueError("top_k must be at least 1")
        self.top_k = top_k

    def score(
        self,
        chapters: Sequence[EmbeddedChapter],
        query_embedding: Sequence[float],
    ) -> list[Candidate]:
        """Score chapters without filtering or truncating."""
        return [
            Candidate(
                chapter=ec.chapter,
                embedding=ec.embedding,
                similarity=cosine_similarity(ec.embedding, query_embedding),
            )
            for ec in chapters
        ]

    def rank(
        self,
        chapters: Sequence[EmbeddedChapter],
        chapter_limit: int | None,
        query_embedding: Sequence[float],
    ) -> list[Candidate]:
        """Select the most relevant chapters within the spoiler boundary.

        Returns:
            At most top_k candidates, by similarity descending; ties go to the
            earlier chapter.

        Raises:
            NoRelevantContentError: If no chapter is inside the boundary.
            DataIntegrityError: If an embedding's dimension differs from the query's.
        """
        permitted = filter_by_boundary(chapters, chapter_limit)
        if not permitted:
            raise NoRelevantContentError(
                f"No chapters available within the chapter limit: {chapter_limit}"
            )

        candidates = self.score(permitted, query_embedding)
        candidates.sort(key=lambda c: (-c.similarity, c.chapter.order))
        return candidates[: self.top_k]
