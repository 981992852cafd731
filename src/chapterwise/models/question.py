"""Question data model."""

from datetime import datetime, timezone
from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class QuestionStatus(str, Enum):
    """Lifecycle states of a question."""

    PENDING = "pending"
    ANSWERED = "answered"
    FAILED = "failed"


class Question(BaseModel):
    """A reader's question about a title, bounded by the last chapter they read."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    title_id: str
    question_text: str
    # Left unconstrained: the pipeline treats missing or non-positive limits as
    # "no chapters permitted" instead of rejecting the record.
    chapter_limit: int | None = None
    answer_text: str | None = None
    status: QuestionStatus = QuestionStatus.PENDING
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
