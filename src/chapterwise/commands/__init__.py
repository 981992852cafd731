"""UI-agnostic command layer for Chapterwise.

Commands return data structures, allowing UIs to render results appropriately.

Usage:
    from chapterwise.commands import ask, ingest, status

    result = ingest.ingest("./moby-dick.txt", title_id="moby-dick")
    result = ask.ask("moby-dick", "Who is Queequeg?", chapter_limit=12)
    result = status.status()
"""

from chapterwise.commands import ask, config_cmd, ingest, questions, status
from chapterwise.commands.base import (
    AnswerCommandResult,
    ChapterRef,
    CommandResult,
    CommandStage,
    ConfigResult,
    IngestResult,
    ProgressCallback,
    ProgressUpdate,
    QuestionInfo,
    QuestionsResult,
    SettingInfo,
    StatusResult,
    TitleInfo,
)

__all__ = [
    # Base types
    "CommandStage",
    "ProgressUpdate",
    "ProgressCallback",
    "CommandResult",
    # Result types
    "IngestResult",
    "AnswerCommandResult",
    "ChapterRef",
    "QuestionsResult",
    "QuestionInfo",
    "StatusResult",
    "TitleInfo",
    "ConfigResult",
    "SettingInfo",
    # Command modules
    "ingest",
    "ask",
    "questions",
    "status",
    "config_cmd",
]
