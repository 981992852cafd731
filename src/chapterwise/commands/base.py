"""Base types for the commands layer.

This module defines the data structures used by all commands:
- Progress callbacks for long-running operations
- Result types for each command
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum


class CommandStage(Enum):
    """Stages of command execution for progress reporting."""

    # Ingest stages
    LOADING = "Loading"
    EMBEDDING = "Embedding"
    STORING = "Storing"

    # General stages
    PROCESSING = "Processing"
    COMPLETE = "Complete"


@dataclass
class ProgressUpdate:
    """Progress update for long-running operations.

    Attributes:
        stage: Current stage of the operation
        current: Current item number
        total: Total number of items (0 for indeterminate)
        message: Optional status message
    """

    stage: CommandStage
    current: int
    total: int
    message: str | None = None

    @property
    def percentage(self) -> int:
        """Progress as percentage (0-100). Returns 0 when the total is unknown."""
        if self.total == 0:
            return 0
        return int(100 * self.current / self.total)


# Callback type for progress updates
ProgressCallback = Callable[[ProgressUpdate], None]


@dataclass
class CommandResult:
    """Base result type for commands."""

    success: bool
    error: str | None = None


@dataclass
class IngestResult(CommandResult):
    """Result of the ingest command.

    Attributes:
        filepath: The book file that was loaded
        title_id: Title the chapters were stored under
        skipped: True if the file had no content
        chapters: Number of chapters stored
        embeddings: Number of chapter embeddings stored
        dimension: Embedding dimension
    """

    filepath: str = ""
    title_id: str = ""
    skipped: bool = False
    chapters: int = 0
    embeddings: int = 0
    dimension: int | None = None


@dataclass
class ChapterRef:
    """A chapter used as answer context."""

    order: int
    name: str
    similarity: float


@dataclass
class AnswerCommandResult(CommandResult):
    """Result of the ask and answer commands.

    Attributes:
        question_id: ID of the stored question (set even when answering failed)
        question: The question text
        chapter_limit: Last chapter the reader has read
        status: Question status after the run
        answer: Generated answer (None unless answered)
        chapters: Chapters placed in the context, narrative order
        dropped: Chapters removed to fit the context budget
    """

    question_id: str | None = None
    question: str = ""
    chapter_limit: int | None = None
    status: str | None = None
    answer: str | None = None
    chapters: list[ChapterRef] = field(default_factory=list)
    dropped: list[ChapterRef] = field(default_factory=list)


@dataclass
class QuestionInfo:
    """Summary of a stored question."""

    question_id: str
    user_id: str
    title_id: str
    question: str
    chapter_limit: int | None
    status: str
    answer: str | None
    created_at: str


@dataclass
class QuestionsResult(CommandResult):
    """Result of the questions command."""

    questions: list[QuestionInfo] = field(default_factory=list)


@dataclass
class TitleInfo:
    """Information about an ingested title."""

    title_id: str
    chapter_count: int
    embedding_count: int = 0


@dataclass
class StatusResult(CommandResult):
    """Result of the status command.

    Attributes:
        total_titles: Number of ingested titles
        total_chapters: Total chapters in database
        total_embeddings: Chapters that have an embedding
        total_questions: Total questions stored
        questions_by_status: Question count per status
        titles: Per-title breakdown (if detailed)
    """

    total_titles: int = 0
    total_chapters: int = 0
    total_embeddings: int = 0
    total_questions: int = 0
    questions_by_status: dict[str, int] = field(default_factory=dict)
    titles: list[TitleInfo] = field(default_factory=list)


@dataclass
class SettingInfo:
    """Information about a single setting."""

    name: str
    value: str
    source: str  # "env var", "yaml", "default"


@dataclass
class ConfigResult(CommandResult):
    """Result of the config command.

    Attributes:
        provider: Provider type (litellm, custom)
        llm_model: LLM model name
        embedding_model: Embedding model name
        data_dir: Data directory path
        settings: List of behavioral settings with sources
        config_path: Path to config file (if found)
        warnings: Unknown keys found in the config file
    """

    provider: str = "litellm"
    llm_model: str | None = None
    embedding_model: str | None = None
    data_dir: str = ""
    settings: list[SettingInfo] = field(default_factory=list)
    config_path: str | None = None
    warnings: list[str] = field(default_factory=list)
