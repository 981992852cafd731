# tests/embedder/test_client_embedder.py
"""Tests for the ClientEmbedder wrapper and chapter text rendering."""

import pytest

from chapterwise.embedder import ClientEmbedder, Embedder, chapter_text
from chapterwise.exceptions import ProviderError
from chapterwise.models import Chapter, ChapterEmbedding
from chapterwise.providers import EmbeddingClient


class FakeEmbeddingClient(EmbeddingClient):
    """Returns one [len(text), index] vector per input."""

    def __init__(self, vectors: list[list[float]] | None = None) -> None:
        self.vectors = vectors
        self.calls: list[list[str]] = []

    def embed(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(texts)
        if self.vectors is not None:
            return self.vectors
        return [[float(len(t)), float(i)] for i, t in enumerate(texts)]


class TestChapterText:
    def test_name_and_content(self):
        chapter = Chapter(title_id="t", order=1, name="Storm", content="Rain fell.")
        assert chapter_text(chapter) == "Storm\nRain fell."

    def test_content_only(self):
        chapter = Chapter(title_id="t", order=1, content="Rain fell.")
        assert chapter_text(chapter) == "Rain fell."


class TestClientEmbedder:
    def test_is_embedder(self):
        assert isinstance(ClientEmbedder(FakeEmbeddingClient()), Embedder)

    def test_embed_text(self):
        client = FakeEmbeddingClient()
        assert ClientEmbedder(client).embed_text("abc") == [3.0, 0.0]
        assert client.calls == [["abc"]]

    def test_embed_texts_single_batch(self):
        client = FakeEmbeddingClient()
        result = ClientEmbedder(client).embed_texts(["a", "bb"])
        assert result == [[1.0, 0.0], [2.0, 1.0]]
        assert len(client.calls) == 1

    @pytest.mark.parametrize("vectors", [[], [[]]])
    def test_missing_vector_raises(self, vectors):
        with pytest.raises(ProviderError):
            ClientEmbedder(FakeEmbeddingClient(vectors)).embed_text("q")

    @pytest.mark.asyncio
    async def test_aembed_text(self):
        assert await ClientEmbedder(FakeEmbeddingClient()).aembed_text("abcd") == [4.0, 0.0]

    def test_embed_chapters(self):
        chapters = [
            Chapter(title_id="t", order=1, name="A", content="xy"),
            Chapter(title_id="t", order=2, content="xyz"),
        ]
        client = FakeEmbeddingClient()

        result = ClientEmbedder(client).embed_chapters(chapters)

        assert all(isinstance(r, ChapterEmbedding) for r in result)
        assert [r.chapter_id for r in result] == [c.id for c in chapters]
        assert client.calls == [["A\nxy", "xyz"]]

    def test_embed_chapters_empty(self):
        client = FakeEmbeddingClient()
        assert ClientEmbedder(client).embed_chapters([]) == []
        assert client.calls == []
