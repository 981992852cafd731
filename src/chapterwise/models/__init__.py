"""Data models for Chapterwise."""

from chapterwise.models.chapter import Chapter, ChapterEmbedding, EmbeddedChapter
from chapterwise.models.question import Question, QuestionStatus
from chapterwise.models.results import AnswerResult, Candidate

__all__ = [
    "Chapter",
    "ChapterEmbedding",
    "EmbeddedChapter",
    "Question",
    "QuestionStatus",
    "Candidate",
    "AnswerResult",
]
