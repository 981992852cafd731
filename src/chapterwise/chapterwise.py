"""Central configuration class for Chapterwise."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

if TYPE_CHECKING:
    from chapterwise.answerer import QuestionAnswerer
    from chapterwise.configuration import ProviderConfig, StorageConfig
    from chapterwise.ingestor import ChapterIngestor, ProgressCallback
    from chapterwise.loaders import Loader
    from chapterwise.models import AnswerResult, Question
    from chapterwise.providers import LLMClient
    from chapterwise.stores import ChapterStore, QuestionStore

from chapterwise.settings import Settings

logger = logging.getLogger(__name__)


class Chapterwise:
    """Central configuration for Chapterwise stores and components.

    Chapterwise bundles the stores and AI components together so you can
    configure once and create answerers/ingestors from it.

    There are two ways to create a Chapterwise instance:

    1. With a storage bundle:

        from chapterwise import Chapterwise, LiteLLMProvider, LocalStorage

        cw = Chapterwise(
            provider=LiteLLMProvider(
                llm="groq/meta-llama/llama-4-scout-17b-16e-instruct",
                embedding="huggingface/BAAI/bge-large-en-v1.5",
            ),
            storage=LocalStorage("./data"),
        )
        question = cw.ask("reader-1", "moby-dick", "Who is Queequeg?", chapter_limit=12)
        answer = cw.generate_answer(question.id)

    2. With explicit stores:

        from chapterwise.stores import SQLiteChapterStore, SQLiteQuestionStore

        cw = Chapterwise(
            provider=LiteLLMProvider(...),
            question_store=SQLiteQuestionStore("./data/questions.db"),
            chapter_store=SQLiteChapterStore("./data/chapters.db"),
        )
    """

    def __init__(
        self,
        *,
        provider: ProviderConfig,
        # EITHER storage bundle...
        storage: StorageConfig | None = None,
        # ...OR explicit stores
        question_store: QuestionStore | None = None,
        chapter_store: ChapterStore | None = None,
        # Common
        settings: Settings | None = None,
        loader: Loader | None = None,
    ) -> None:
        """Create a Chapterwise instance.

        Args:
            provider: Provider configuration (builds the embedder and LLM client).
            storage: Storage bundle. Mutually exclusive with explicit stores.
            question_store: Explicit question store. Use with chapter_store.
            chapter_store: Explicit chapter store.
            settings: Behavioral settings (top_k, max_context_chars, etc.)
            loader: Book loader for ingest_book(). If None, uses TextBookLoader.

        Raises:
            ValueError: If neither a storage bundle nor both explicit stores
                        are provided, or if both are provided.
        """
        self._settings = settings if settings is not None else Settings()

        if storage is not None:
            if question_store is not None or chapter_store is not None:
                raise ValueError("Cannot mix 'storage' bundle with explicit stores")
            self.question_store, self.chapter_store = storage.build_stores()

        elif question_store is not None and chapter_store is not None:
            self.question_store = cast("QuestionStore", question_store)
            self.chapter_store = cast("ChapterStore", chapter_store)

        else:
            raise ValueError(
                "Must provide either 'storage' bundle or both explicit stores "
                "(question_store, chapter_store)"
            )

        self.embedder = provider.build_embedder(self._settings)
        self.llm_client: LLMClient = provider.build_llm_client(self._settings)
        self._loader = loader

    @property
    def settings(self) -> Settings:
        return self._settings

    def _get_loader(self) -> Loader:
        if self._loader is None:
            from chapterwise.loaders import TextBookLoader

            self._loader = TextBookLoader()
        return self._loader

    def answerer(self, *, answer_prompt: str | None = None) -> QuestionAnswerer:
        """Create a QuestionAnswerer using this instance's stores and settings.

        Args:
            answer_prompt: Custom user prompt template. If None, uses settings.
        """
        from chapterwise.answerer import QuestionAnswerer
        from chapterwise.context import ContextAssembler
        from chapterwise.generator import AnswerGenerator
        from chapterwise.ranker import RelevanceRanker

        return QuestionAnswerer(
            question_store=self.question_store,
            chapter_store=self.chapter_store,
            embedder=self.embedder,
            generator=AnswerGenerator(
                self.llm_client,
                temperature=self._settings.synthesis_temperature,
                max_tokens=self._settings.max_answer_tokens,
            ),
            ranker=RelevanceRanker(top_k=self._settings.top_k),
            assembler=ContextAssembler(max_chars=self._settings.max_context_chars),
            answer_prompt=answer_prompt or self._settings.answer_prompt,
            embedding_dimension=self._settings.embedding_dimension,
            lease_seconds=self._settings.run_lease_seconds,
        )

    def ingestor(self, *, batch_size: int | None = None) -> ChapterIngestor:
        """Create a ChapterIngestor using this instance's stores.

        Args:
            batch_size: Chapters per embedding request. If None, uses settings.
        """
        from chapterwise.ingestor import ChapterIngestor

        return ChapterIngestor(
            chapter_store=self.chapter_store,
            embedder=self.embedder,
            batch_size=batch_size or self._settings.embed_batch_size,
            embedding_dimension=self._settings.embedding_dimension,
        )

    def ask(
        self,
        user_id: str,
        title_id: str,
        question_text: str,
        chapter_limit: int | None,
    ) -> Question:
        """Record a new question with status pending. Does not answer it."""
        from chapterwise.models import Question

        question = Question(
            user_id=user_id,
            title_id=title_id,
            question_text=question_text,
            chapter_limit=chapter_limit,
        )
        self.question_store.put(question)
        logger.debug("Stored question %s for title %s", question.id, title_id)
        return question

    def generate_answer(self, question_id: str) -> str:
        """Run the answer pipeline for a stored question and return the answer text."""
        return self.answerer().generate_answer(question_id)

    async def agenerate_answer(self, question_id: str) -> str:
        """Async version of generate_answer()."""
        return await self.answerer().agenerate_answer(question_id)

    def answer_question(self, question_id: str) -> AnswerResult:
        """Run the answer pipeline and return the answer with the chapters it used."""
        return self.answerer().answer_question(question_id)

    def get_question(self, question_id: str) -> Question | None:
        return self.question_store.get(question_id)

    def ingest_book(
        self,
        path: str,
        title_id: str,
        *,
        replace: bool = True,
        on_progress: ProgressCallback | None = None,
    ) -> dict:
        """Load a book file, split it into chapters and store them with embeddings.

        Args:
            path: Path to the book file.
            title_id: Title the chapters belong to.
            replace: Swap out the title's existing chapters once the new ones
                     are embedded. If False and the title already has chapters,
                     raises ValueError.
            on_progress: Optional callback for progress updates.

        Returns:
            Dict with ingestion statistics, or {"skipped": True, "reason": ...}
            when the file has no content.
        """
        chapters = self._get_loader().load(path, title_id)
        if not chapters:
            return {"skipped": True, "reason": "no content"}

        existing = self.chapter_store.count_chapters(title_id)
        if existing:
            if not replace:
                raise ValueError(f"Title {title_id} already has {existing} chapters")
            logger.info("Replacing %d chapters of title %s", existing, title_id)

        return self.ingestor().ingest_chapters(
            chapters, on_progress=on_progress, replace=bool(existing)
        )

    def delete_title(self, title_id: str) -> dict:
        """Delete all chapters and embeddings of a title."""
        count = self.chapter_store.count_chapters(title_id)
        if not count:
            return {"deleted": False, "reason": "title not found"}
        self.chapter_store.delete_title(title_id)
        return {"deleted": True, "chapters_removed": count}
