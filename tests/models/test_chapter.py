# tests/models/test_chapter.py
"""Tests for the chapter models."""

import pytest
from pydantic import ValidationError

from chapterwise.models import Chapter, ChapterEmbedding, EmbeddedChapter


class TestChapter:
    def test_create_chapter(self):
        chapter = Chapter(title_id="moby-dick", order=1, name="Loomings", content="Call me Ishmael.")
        assert chapter.title_id == "moby-dick"
        assert chapter.order == 1
        assert chapter.name == "Loomings"
        assert chapter.content == "Call me Ishmael."
        assert chapter.id is not None

    def test_chapter_unique_ids(self):
        c1 = Chapter(title_id="t", order=1)
        c2 = Chapter(title_id="t", order=2)
        assert c1.id != c2.id

    def test_name_and_content_default_empty(self):
        chapter = Chapter(title_id="t", order=3)
        assert chapter.name == ""
        assert chapter.content == ""

    @pytest.mark.parametrize("order", [0, -1])
    def test_order_must_be_positive(self, order):
        with pytest.raises(ValidationError):
            Chapter(title_id="t", order=order)


class TestChapterEmbedding:
    def test_create(self):
        emb = ChapterEmbedding(chapter_id="c1", embedding=[0.1, 0.2])
        assert emb.chapter_id == "c1"
        assert emb.embedding == [0.1, 0.2]

    def test_embedded_chapter(self):
        chapter = Chapter(title_id="t", order=1)
        ec = EmbeddedChapter(chapter=chapter, embedding=[1, 0])
        assert ec.chapter == chapter
        assert ec.embedding == [1.0, 0.0]
