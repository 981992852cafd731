"""Chapter data models."""

from uuid import uuid4

from pydantic import BaseModel, Field


class Chapter(BaseModel):
    """A chapter of a title. `order` defines the narrative sequence."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    title_id: str
    order: int = Field(gt=0)
    name: str = ""
    content: str = ""


class ChapterEmbedding(BaseModel):
    """The precomputed embedding of one chapter (1:1 with Chapter)."""

    chapter_id: str
    embedding: list[float]


class EmbeddedChapter(BaseModel):
    """A Chapter paired with its decoded embedding vector."""

    chapter: Chapter
    embedding: list[float]
