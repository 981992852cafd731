"""Result data models for the answer pipeline."""

from pydantic import BaseModel, Field

from chapterwise.models.chapter import Chapter


class Candidate(BaseModel):
    """A chapter considered for the answer context, with its similarity score."""

    chapter: Chapter
    embedding: list[float]
    similarity: float


class AnswerResult(BaseModel):
    """Outcome of a successful pipeline run."""

    question_id: str
    answer_text: str
    chapters: list[Candidate] = Field(default_factory=list)  # narrative order
    dropped: list[Candidate] = Field(default_factory=list)  # cut by the context budget
