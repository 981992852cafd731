"""Abstract base classes for storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from chapterwise.exceptions import ChaptersNotFoundError, DataIntegrityError
from chapterwise.models import Chapter, ChapterEmbedding, EmbeddedChapter, Question, QuestionStatus
from chapterwise.stores.codec import decode_embedding


class ChapterStore(ABC):
    """Abstract base class for chapter and chapter-embedding storage."""

    @abstractmethod
    def put(self, chapter: Chapter) -> None:
        """Store a chapter, overwriting if it exists."""
        ...

    @abstractmethod
    def put_many(self, chapters: list[Chapter]) -> None:
        """Store multiple chapters, overwriting if they exist."""
        ...

    @abstractmethod
    def get(self, chapter_id: str) -> Chapter | None:
        """Retrieve a chapter by ID. Returns None if not found."""
        ...

    @abstractmethod
    def get_by_title(self, title_id: str) -> list[Chapter]:
        """Get all chapters of a title, ordered by chapter order."""
        ...

    @abstractmethod
    def put_embeddings(self, embeddings: list[ChapterEmbedding]) -> None:
        """Store chapter embeddings in canonical text form, overwriting existing ones."""
        ...

    @abstractmethod
    def save_chapters(
        self,
        chapters: list[Chapter],
        embeddings: list[ChapterEmbedding],
        *,
        replace: bool = False,
    ) -> None:
        """Store chapters together with their embeddings as one atomic write.

        With replace=True, every existing chapter of the titles being written
        is deleted in the same write. On failure nothing changes.
        """
        ...

    @abstractmethod
    def get_embedding_rows(self, title_id: str) -> list[tuple[Chapter, str | None]]:
        """Get (chapter, stored embedding text) pairs for a title, ordered by chapter order.

        The embedding text is None when the chapter has no embedding row.
        """
        ...

    @abstractmethod
    def count_chapters(self, title_id: str | None = None) -> int:
        """Count chapters, optionally restricted to one title."""
        ...

    @abstractmethod
    def count_embeddings(self, title_id: str | None = None) -> int:
        """Count chapters that have an embedding, optionally restricted to one title."""
        ...

    @abstractmethod
    def list_titles(self) -> list[str]:
        """List all title IDs that have chapters."""
        ...

    @abstractmethod
    def delete_title(self, title_id: str) -> None:
        """Delete all chapters of a title and their embeddings."""
        ...

    def load_embedded_chapters(
        self,
        title_id: str,
        dimension: int | None = None,
    ) -> list[EmbeddedChapter]:
        """Load every chapter of a title joined with its decoded embedding.

        Args:
            title_id: Title to load.
            dimension: Expected embedding length. If None, all embeddings of
                       the title must share the length of the first one.

        Raises:
            ChaptersNotFoundError: If the title has no chapters.
            DataIntegrityError: If an embedding is missing, malformed, or has
                                the wrong dimension.
        """
        rows = self.get_embedding_rows(title_id)
        if not rows:
            raise ChaptersNotFoundError(title_id)

        embedded: list[EmbeddedChapter] = []
        expected = dimension
        for chapter, raw in rows:
            if raw is None:
                raise DataIntegrityError(
                    f"Chapter {chapter.order} ({chapter.id}) of title {title_id} has no embedding"
                )
            try:
                vector = decode_embedding(raw, expected)
            except DataIntegrityError as e:
                raise DataIntegrityError(
                    f"Chapter {chapter.order} ({chapter.id}) of title {title_id}: {e}"
                ) from e
            expected = len(vector)
            embedded.append(EmbeddedChapter(chapter=chapter, embedding=vector))
        return embedded


class QuestionStore(ABC):
    """Abstract base class for question storage.

    Status transitions made by the answer pipeline go through claim(),
    complete() and fail(), which must each be a single atomic operation.
    """

    @abstractmethod
    def put(self, question: Question) -> None:
        """Store a question, overwriting if it exists."""
        ...

    @abstractmethod
    def get(self, question_id: str) -> Question | None:
        """Retrieve a question by ID. Returns None if not found."""
        ...

    @abstractmethod
    def list_questions(
        self,
        user_id: str | None = None,
        title_id: str | None = None,
        status: QuestionStatus | None = None,
        since: datetime | None = None,
    ) -> list[Question]:
        """List questions matching all given filters, newest first."""
        ...

    @abstractmethod
    def delete(self, question_id: str) -> None:
        """Delete a question by ID."""
        ...

    @abstractmethod
    def count_questions(self, status: QuestionStatus | None = None) -> int:
        """Count questions, optionally restricted to one status."""
        ...

    @abstractmethod
    def claim(self, question_id: str, run_token: str, lease_seconds: float) -> bool:
        """Start a run: set status pending and take the lease.

        Succeeds regardless of the previous status unless another run holds
        an unexpired lease.

        Returns:
            True if the lease was taken, False if the question is busy or absent.
        """
        ...

    @abstractmethod
    def complete(self, question_id: str, run_token: str, answer_text: str) -> bool:
        """Write the answer, set status answered and release the lease.

        Returns:
            False (and writes nothing) if run_token no longer owns the question.
        """
        ...

    @abstractmethod
    def fail(self, question_id: str, run_token: str) -> bool:
        """Set status failed and release the lease. answer_text is left untouched.

        Returns:
            False (and writes nothing) if run_token no longer owns the question.
        """
        ...
