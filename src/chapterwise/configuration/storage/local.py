"""Local filesystem storage configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chapterwise.stores import ChapterStore, QuestionStore


@dataclass(frozen=True)
class LocalStorage:
    """Local filesystem storage using SQLite.

    All data is persisted to the specified directory:
    - questions.db: Questions, answers, status and run leases
    - chapters.db: Chapters and chapter embeddings

    Args:
        data_dir: Base directory for all storage files.
                  Created if it doesn't exist.

    Example:
        storage = LocalStorage("./my_data")
    """

    data_dir: str

    def build_stores(self) -> tuple[QuestionStore, ChapterStore]:
        """Build both storage components.

        Creates the data directory if it doesn't exist.

        Returns:
            Tuple of (question_store, chapter_store)
        """
        from chapterwise.stores import SQLiteChapterStore, SQLiteQuestionStore

        Path(self.data_dir).mkdir(parents=True, exist_ok=True)

        question_store = SQLiteQuestionStore(os.path.join(self.data_dir, "questions.db"))
        chapter_store = SQLiteChapterStore(os.path.join(self.data_dir, "chapters.db"))

        return question_store, chapter_store
