"""Chapter ingestion: embed chapters and store them with their embeddings."""

import logging
from collections.abc import Callable

from chapterwise.embedder import Embedder
from chapterwise.exceptions import DataIntegrityError
from chapterwise.models import Chapter, ChapterEmbedding
from chapterwise.stores import ChapterStore

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int, str], None]
"""Callback for ingestion progress updates.

Args:
    event: Event type - "storing" or "embedding"
    current: Current progress count (0 to total)
    total: Total items to process
    message: Human-readable status message

Example:
    def on_progress(event: str, current: int, total: int, message: str) -> None:
        print(f"[{event}] {current}/{total}: {message}")
"""


class ChapterIngestor:
    """Stores chapters and computes the embeddings retrieval depends on.

    Pipeline:
    1. Validate chapter orders (unique per title)
    2. Embed chapters in batches
    3. Check every vector has the same dimension
    4. Store chapters and embeddings
    """

    def __init__(
        self,
        chapter_store: ChapterStore,
        embedder: Embedder,
        batch_size: int = 16,
        embedding_dimension: int | None = None,
    ) -> None:
        """Initialize the ingestor.

        Args:
            chapter_store: Store for chapters and embeddings
            embedder: Component to embed chapter text
            batch_size: Chapters per embedding request
            embedding_dimension: Expected vector length, or None to accept
                                 whatever the first batch returns
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.chapter_store = chapter_store
        self.embedder = embedder
        self.batch_size = batch_size
        self.embedding_dimension = embedding_dimension

    def ingest_chapters(
        self,
        chapters: list[Chapter],
        on_progress: ProgressCallback | None = None,
        *,
        replace: bool = False,
    ) -> dict:
        """Store chapters and their embeddings.

        Args:
            chapters: Chapters to ingest (any number of titles)
            on_progress: Optional callback for progress updates
            replace: Drop the existing chapters of the ingested titles in the
                     same write that stores the new ones

        Returns:
            Dict with "chapters", "embeddings" and "dimension" counts.

        Raises:
            ValueError: If two chapters of one title share an order.
            DataIntegrityError: If the embedder returns vectors of inconsistent
                                or unexpected dimension. Nothing is stored and
                                existing chapters are kept.
        """

        def progress(event: str, current: int, total: int, message: str) -> None:
            if on_progress:
                on_progress(event, current, total, message)

        if not chapters:
            return {"chapters": 0, "embeddings": 0, "dimension": self.embedding_dimension}

        seen: set[tuple[str, int]] = set()
        for chapter in chapters:
            key = (chapter.title_id, chapter.order)
            if key in seen:
                raise ValueError(
                    f"Duplicate chapter order {chapter.order} for title {chapter.title_id}"
                )
            seen.add(key)

        total = len(chapters)
        embeddings: list[ChapterEmbedding] = []
        progress("embedding", 0, total, "Embedding chapters...")
        for start in range(0, total, self.batch_size):
            batch = chapters[start : start + self.batch_size]
            embeddings.extend(self.embedder.embed_chapters(batch))
            done = min(start + self.batch_size, total)
            progress("embedding", done, total, f"Embedded {done}/{total} chapters")

        dimension = self._check_dimensions(embeddings)

        progress("storing", 0, 1, f"Storing {total} chapters...")
        self.chapter_store.save_chapters(chapters, embeddings, replace=replace)
        progress("storing", 1, 1, "Storing chapters complete")

        logger.info("Ingested %d chapters (dimension %d)", total, dimension)
        return {"chapters": total, "embeddings": len(embeddings), "dimension": dimension}

    def _check_dimensions(self, embeddings: list[ChapterEmbedding]) -> int:
        expected = self.embedding_dimension
        for emb in embeddings:
            if not emb.embedding:
                raise DataIntegrityError(f"Empty embedding for chapter {emb.chapter_id}")
            if expected is None:
                expected = len(emb.embedding)
            elif len(emb.embedding) != expected:
                raise DataIntegrityError(
                    f"Embedding for chapter {emb.chapter_id} has dimension "
                    f"{len(emb.embedding)}, expected {expected}"
                )
        assert expected is not None
        return expected
