# src/chapterwise/embedder/base.py
"""Embedder abstract base class."""

from abc import ABC, abstractmethod

from chapterwise.models import Chapter, ChapterEmbedding


def chapter_text(chapter: Chapter) -> str:
    """Text that represents a chapter for embedding purposes."""
    if chapter.name:
        return f"{chapter.name}\n{chapter.content}"
    return chapter.content


class Embedder(ABC):
    """Abstract base class for embedding generation.

    Subclasses must implement embed_text and embed_texts.
    """

    @abstractmethod
    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        ...

    @abstractmethod
    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        ...

    async def aembed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text (async)."""
        return self.embed_text(text)

    def embed_chapters(self, chapters: list[Chapter]) -> list[ChapterEmbedding]:
        """Embed multiple chapters (batched for efficiency)."""
        if not chapters:
            return []
        embeddings = self.embed_texts([chapter_text(c) for c in chapters])
        return [
            ChapterEmbedding(chapter_id=c.id, embedding=emb)
            for c, emb in zip(chapters, embeddings, strict=True)
        ]
