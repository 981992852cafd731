"""Storage abstractions for Chapterwise."""

from chapterwise.stores.base import ChapterStore, QuestionStore
from chapterwise.stores.codec import decode_embedding, encode_embedding
from chapterwise.stores.sqlite_chapter import SQLiteChapterStore
from chapterwise.stores.sqlite_question import SQLiteQuestionStore

__all__ = [
    "ChapterStore",
    "QuestionStore",
    "SQLiteChapterStore",
    "SQLiteQuestionStore",
    "decode_embedding",
    "encode_embedding",
]
