"""Loader abstract base class."""

from abc import ABC, abstractmethod

from chapterwise.models import Chapter


class Loader(ABC):
    """Abstract base class for loading a book file into chapters."""

    @abstractmethod
    def load(self, path: str, title_id: str) -> list[Chapter]:
        """Load a file and return its chapters.

        Args:
            path: Path to the file to load
            title_id: Title the chapters belong to

        Returns:
            Chapters with order 1..n in reading sequence
        """
        ...

    @abstractmethod
    def supports(self, path: str) -> bool:
        """Check if this loader supports the given path."""
        ...
