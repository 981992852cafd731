"""Shared pytest fixtures."""

import os
import tempfile

import pytest

# Keyword axes for the deterministic test embedder.
VOCABULARY = ["murder", "butler", "garden", "storm", "letter", "ship", "inheritance", "knife"]


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def chapter_store(temp_dir):
    from chapterwise.stores import SQLiteChapterStore

    return SQLiteChapterStore(os.path.join(temp_dir, "chapters.db"))


@pytest.fixture
def question_store(temp_dir):
    from chapterwise.stores import SQLiteQuestionStore

    return SQLiteQuestionStore(os.path.join(temp_dir, "questions.db"))


@pytest.fixture
def keyword_embedder():
    """Embedder whose vector counts VOCABULARY keywords in the text.

    Texts without any keyword embed to the zero vector.
    """
    from chapterwise.embedder import Embedder

    class _KeywordEmbedder(Embedder):
        def __init__(self) -> None:
            self.calls: list[str] = []

        def embed_text(self, text: str) -> list[float]:
            self.calls.append(text)
            lowered = text.lower()
            return [float(lowered.count(word)) for word in VOCABULARY]

        def embed_texts(self, texts: list[str]) -> list[list[float]]:
            return [self.embed_text(t) for t in texts]

    return _KeywordEmbedder()


@pytest.fixture
def mock_llm():
    """LLM client that records the messages it receives and returns a fixed answer."""
    from chapterwise.providers import LLMClient

    class MockLLMClient(LLMClient):
        def __init__(self) -> None:
            self.answer: str | None = "The butler is a suspect."
            self.error: Exception | None = None
            self.calls: list[dict] = []

        def complete(self, messages, temperature=None, max_tokens=None):
            self.calls.append(
                {"messages": messages, "temperature": temperature, "max_tokens": max_tokens}
            )
            if self.error is not None:
                raise self.error
            return self.answer

        @property
        def prompt(self) -> str:
            """Full text of the last request."""
            return "\n".join(m["content"] for m in self.calls[-1]["messages"])

    return MockLLMClient()


@pytest.fixture
def book_chapters():
    """Five chapters of a small mystery. The murderer is revealed in chapter 5."""
    from chapterwise.models import Chapter

    return [
        Chapter(
            title_id="mystery",
            order=1,
            name="The Garden Party",
            content="Lady Ashworth hosts a garden party. A letter arrives during the storm.",
        ),
        Chapter(
            title_id="mystery",
            order=2,
            name="A Body in the Library",
            content="A murder! Lord Ashworth is found dead. The butler discovers the body.",
        ),
        Chapter(
            title_id="mystery",
            order=3,
            name="The Inspector Arrives",
            content="The inspector questions the butler about the murder and the inheritance.",
        ),
        Chapter(
            title_id="mystery",
            order=4,
            name="At Sea",
            content="The nephew boards a ship to escape the storm of rumors.",
        ),
        Chapter(
            title_id="mystery",
            order=5,
            name="The Reveal",
            content="The gardener confesses to the murder with the knife. SPOILER-GARDENER.",
        ),
    ]


@pytest.fixture
def seeded_chapter_store(chapter_store, keyword_embedder, book_chapters):
    """Chapter store holding the mystery title with keyword embeddings."""
    chapter_store.put_many(book_chapters)
    chapter_store.put_embeddings(keyword_embedder.embed_chapters(book_chapters))
    keyword_embedder.calls.clear()
    return chapter_store


@pytest.fixture
def make_question(question_store):
    """Store a question and return it."""
    from chapterwise.models import Question

    def _make(
        question_text: str = "Who committed the murder?",
        chapter_limit: int | None = 3,
        title_id: str = "mystery",
        user_id: str = "reader-1",
    ) -> Question:
        question = Question(
            user_id=user_id,
            title_id=title_id,
            question_text=question_text,
            chapter_limit=chapter_limit,
        )
        question_store.put(question)
        return question

    return _make


@pytest.fixture
def answerer(question_store, seeded_chapter_store, keyword_embedder, mock_llm):
    from chapterwise.answerer import QuestionAnswerer
    from chapterwise.generator import AnswerGenerator

    return QuestionAnswerer(
        question_store=question_store,
        chapter_store=seeded_chapter_store,
        embedder=keyword_embedder,
        generator=AnswerGenerator(mock_llm),
    )


@pytest.fixture
def mock_provider(keyword_embedder, mock_llm):
    """Provider satisfying the ProviderConfig protocol with the mock components."""
    from dataclasses import dataclass
    from typing import Any

    @dataclass(frozen=True)
    class MockProvider:
        _embedder: Any
        _llm_client: Any

        def build_embedder(self, settings: Any) -> Any:
            return self._embedder

        def build_llm_client(self, settings: Any) -> Any:
            return self._llm_client

    return MockProvider(_embedder=keyword_embedder, _llm_client=mock_llm)


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run in an empty working directory with no CHAPTERWISE_* variables set."""
    import os

    for key in list(os.environ):
        if key.startswith("CHAPTERWISE_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def offline_chapterwise(monkeypatch, mock_provider, isolated_env):
    """Make the commands layer build Chapterwise with the mock provider."""
    from chapterwise.chapterwise import Chapterwise
    from chapterwise.configuration import LocalStorage

    def _create(config):
        return Chapterwise(
            provider=mock_provider,
            storage=LocalStorage(config.data_dir),
            settings=config.settings,
        )

    monkeypatch.setattr("chapterwise.commands.ingest.create_chapterwise", _create)
    monkeypatch.setattr("chapterwise.commands.ask.create_chapterwise", _create)
    return isolated_env


@pytest.fixture
def book_file(isolated_env):
    """A three-chapter book on disk. The murderer is named in chapter 3."""
    path = isolated_env / "ashworth.txt"
    path.write_text(
        "Chapter 1: The Garden Party\n"
        "Lady Ashworth hosts a garden party.\n\n"
        "Chapter 2: A Body in the Library\n"
        "A murder! The butler discovers the body.\n\n"
        "Chapter 3: The Reveal\n"
        "The gardener confesses to the murder with the knife. SPOILER-GARDENER.\n",
        encoding="utf-8",
    )
    return path
