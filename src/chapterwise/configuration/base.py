"""Protocol definitions for configuration objects.

These protocols define the interfaces for provider and storage configurations.
Implementations can use @dataclass(frozen=True) for immutability.

Protocols (here) are structural: any object with the right methods works,
which suits configs whose implementations vary by vendor. Stores and
provider clients are ABCs because they share behavior through inheritance.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from chapterwise.embedder import Embedder
    from chapterwise.providers import LLMClient
    from chapterwise.settings import Settings
    from chapterwise.stores import ChapterStore, QuestionStore


@runtime_checkable
class ProviderConfig(Protocol):
    """Protocol for provider configurations.

    Provider configurations build the AI components:
    - Embedder: embeds question text (and chapters at ingestion time)
    - LLMClient: generates answers
    """

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build an embedder for creating vector embeddings."""
        ...

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build an LLM client for answer generation."""
        ...


@runtime_checkable
class StorageConfig(Protocol):
    """Protocol for storage configurations.

    Storage configurations build the data stores:
    - QuestionStore: questions, answers and run leases
    - ChapterStore: chapters and their embeddings
    """

    def build_stores(self) -> tuple[QuestionStore, ChapterStore]:
        """Build both storage components.

        Returns:
            Tuple of (question_store, chapter_store)
        """
        ...
