"""Chapterwise - spoiler-safe question answering over books.

A reader asks a question about a title and says how far they have read.
The answer is generated only from chapters up to that point.

Quick Start (LiteLLM + Local Storage):
    from chapterwise import Chapterwise, LiteLLMProvider, LocalStorage

    cw = Chapterwise(
        provider=LiteLLMProvider(
            llm="groq/meta-llama/llama-4-scout-17b-16e-instruct",
            embedding="huggingface/BAAI/bge-large-en-v1.5",
        ),
        storage=LocalStorage("./data"),
    )

    # Ingest a book
    cw.ingest_book("moby-dick.txt", title_id="moby-dick")

    # Ask and answer
    question = cw.ask("reader-1", "moby-dick", "Who is Queequeg?", chapter_limit=12)
    answer = cw.generate_answer(question.id)

Explicit Stores:
    from chapterwise import Chapterwise, LiteLLMProvider
    from chapterwise.stores import SQLiteChapterStore, SQLiteQuestionStore

    cw = Chapterwise(
        provider=LiteLLMProvider(llm="openai/gpt-5-mini", embedding="openai/text-embedding-3-small"),
        question_store=SQLiteQuestionStore("./data/questions.db"),
        chapter_store=SQLiteChapterStore("./data/chapters.db"),
    )
"""

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("chapterwise-rag")
except PackageNotFoundError:
    # Development / source-tree fallback (e.g. running tests without installing the wheel).
    try:
        import tomllib
        from pathlib import Path

        def _read_version_from_pyproject() -> str | None:
            for parent in Path(__file__).resolve().parents:
                pyproject = parent / "pyproject.toml"
                if pyproject.exists():
                    data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
                    version = data.get("project", {}).get("version")
                    return str(version) if version is not None else None
            return None

        __version__ = _read_version_from_pyproject() or "unknown"
    except (OSError, ValueError):
        __version__ = "unknown"

# Pipeline components
from chapterwise.answerer import QuestionAnswerer

# Central configuration
from chapterwise.chapterwise import Chapterwise

# Configuration objects
from chapterwise.configuration import (
    LiteLLMProvider,
    LocalStorage,
    ProviderConfig,
    StorageConfig,
)
from chapterwise.context import AssembledContext, ContextAssembler
from chapterwise.embedder import ClientEmbedder, Embedder

# Errors
from chapterwise.exceptions import (
    ChaptersNotFoundError,
    ChapterwiseError,
    DataIntegrityError,
    EmptyResponseError,
    NoRelevantContentError,
    NotFoundError,
    ProviderError,
    ProviderTimeoutError,
    QuestionBusyError,
    QuestionNotFoundError,
)
from chapterwise.generator import AnswerGenerator
from chapterwise.ingestor import ChapterIngestor

# Book loading
from chapterwise.loaders import Loader, TextBookLoader

# Core models
from chapterwise.models import (
    AnswerResult,
    Candidate,
    Chapter,
    ChapterEmbedding,
    EmbeddedChapter,
    Question,
    QuestionStatus,
)

# Provider ABCs
from chapterwise.providers import EmbeddingClient, LLMClient
from chapterwise.ranker import RelevanceRanker, cosine_similarity

# Configuration
from chapterwise.settings import Settings

# Storage
from chapterwise.stores import (
    ChapterStore,
    QuestionStore,
    SQLiteChapterStore,
    SQLiteQuestionStore,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "AnswerResult",
    "Candidate",
    "Chapter",
    "ChapterEmbedding",
    "EmbeddedChapter",
    "Question",
    "QuestionStatus",
    # Config
    "Settings",
    # Configuration objects
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
    # Storage
    "ChapterStore",
    "QuestionStore",
    "SQLiteChapterStore",
    "SQLiteQuestionStore",
    # Embedding
    "Embedder",
    "ClientEmbedder",
    # Provider ABCs
    "LLMClient",
    "EmbeddingClient",
    # Pipeline
    "RelevanceRanker",
    "cosine_similarity",
    "ContextAssembler",
    "AssembledContext",
    "AnswerGenerator",
    "QuestionAnswerer",
    "ChapterIngestor",
    # Central configuration
    "Chapterwise",
    # Book loading
    "Loader",
    "TextBookLoader",
    # Errors
    "ChapterwiseError",
    "NotFoundError",
    "QuestionNotFoundError",
    "ChaptersNotFoundError",
    "DataIntegrityError",
    "NoRelevantContentError",
    "ProviderError",
    "ProviderTimeoutError",
    "EmptyResponseError",
    "QuestionBusyError",
]
