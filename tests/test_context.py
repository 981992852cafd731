# tests/test_context.py
"""Tests for context assembly."""

import pytest

from chapterwise.context import ContextAssembler, render_chapter
from chapterwise.exceptions import NoRelevantContentError
from chapterwise.models import Candidate, Chapter


def _candidate(order: int, similarity: float, content: str = "", name: str = "") -> Candidate:
    return Candidate(
        chapter=Chapter(title_id="t", order=order, name=name, content=content or f"Body {order}"),
        embedding=[1.0],
        similarity=similarity,
    )


class TestRenderChapter:
    def test_with_name(self):
        chapter = Chapter(title_id="t", order=4, name="The Storm", content="Rain.")
        assert render_chapter(chapter) == "Chapter 4: The Storm\nRain."

    def test_without_name(self):
        chapter = Chapter(title_id="t", order=2, content="Quiet.")
        assert render_chapter(chapter) == "Chapter 2\nQuiet."


class TestContextAssembler:
    def test_narrative_order_regardless_of_rank(self):
        selection = [_candidate(3, 0.9), _candidate(1, 0.8), _candidate(2, 0.1)]

        context = ContextAssembler().assemble(selection)

        assert [c.chapter.order for c in context.chapters] == [1, 2, 3]
        assert context.text.index("Chapter 1") < context.text.index("Chapter 2")
        assert context.text.index("Chapter 2") < context.text.index("Chapter 3")

    def test_chapters_separated_by_blank_line(self):
        context = ContextAssembler().assemble([_candidate(1, 0.5), _candidate(2, 0.5)])
        assert context.text == "Chapter 1\nBody 1\n\nChapter 2\nBody 2"

    def test_empty_selection_raises(self):
        with pytest.raises(NoRelevantContentError):
            ContextAssembler().assemble([])

    def test_max_chars_must_be_positive(self):
        with pytest.raises(ValueError):
            ContextAssembler(max_chars=0)

    def test_fits_budget_untouched(self):
        context = ContextAssembler(max_chars=1000).assemble([_candidate(1, 0.5)])
        assert context.dropped == []
        assert context.truncated is False

    def test_drops_lowest_similarity_first(self):
        selection = [
            _candidate(1, 0.9, "a" * 40),
            _candidate(2, 0.2, "b" * 40),
            _candidate(3, 0.5, "c" * 40),
        ]

        # Two rendered chapters are ~100 chars, three ~150
        context = ContextAssembler(max_chars=110).assemble(selection)

        assert [c.chapter.order for c in context.chapters] == [1, 3]
        assert [c.chapter.order for c in context.dropped] == [2]
        assert len(context.text) <= 110
        assert "b" * 40 not in context.text

    def test_similarity_tie_drops_later_chapter(self):
        selection = [_candidate(1, 0.5, "a" * 40), _candidate(2, 0.5, "b" * 40)]
        context = ContextAssembler(max_chars=60).assemble(selection)
        assert [c.chapter.order for c in context.chapters] == [1]
        assert [c.chapter.order for c in context.dropped] == [2]

    def test_single_oversized_chapter_is_truncated(self):
        context = ContextAssembler(max_chars=50).assemble([_candidate(1, 0.9, "x" * 500)])

        assert context.truncated is True
        assert len(context.text) == 50
        assert context.text.startswith("Chapter 1\n")
        assert [c.chapter.order for c in context.chapters] == [1]

    def test_never_exceeds_budget(self):
        selection = [_candidate(i, 1.0 / i, "y" * (30 * i)) for i in range(1, 8)]
        for budget in (10, 75, 200, 600):
            assert len(ContextAssembler(max_chars=budget).assemble(selection).text) <= budget
