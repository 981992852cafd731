"""Context assembly: render selected chapters into one bounded text block."""

import logging
from dataclasses import dataclass, field

from chapterwise.exceptions import NoRelevantContentError
from chapterwise.models import Candidate, Chapter

logger = logging.getLogger(__name__)

CHAPTER_SEPARATOR = "\n\n"
DEFAULT_MAX_CONTEXT_CHARS = 24_000


def render_chapter(chapter: Chapter) -> str:
    """Render a chapter as "Chapter <order>: <name>" followed by its content."""
    heading = f"Chapter {chapter.order}"
    if chapter.name:
        heading = f"{heading}: {chapter.name}"
    return f"{heading}\n{chapter.content}"


def render_context(candidates: list[Candidate]) -> str:
    """Render candidates in the given order, separated by blank lines."""
    return CHAPTER_SEPARATOR.join(render_chapter(c.chapter) for c in candidates)


@dataclass
class AssembledContext:
    """A rendered context block and the chapters that went into it.

    Attributes:
        text: The rendered block, never longer than the assembler's budget.
        chapters: Included candidates in narrative (chapter order) sequence.
        dropped: Candidates removed to fit the budget, lowest similarity first.
        truncated: True if the content of the last remaining chapter was cut.
    """

    text: str
    chapters: list[Candidate]
    dropped: list[Candidate] = field(default_factory=list)
    truncated: bool = False


class ContextAssembler:
    """Orders selected chapters narratively and renders them within a size budget.

    Budget policy: while the rendered block is over max_chars and more than
    one chapter remains, drop the lowest-similarity chapter (the later one on
    ties). If a single chapter is still over budget, its text is cut at
    max_chars.
    """

    def __init__(self, max_chars: int = DEFAULT_MAX_CONTEXT_CHARS) -> None:
        if max_chars < 1:
            raise ValueError("max_chars must be at least 1")
        self.max_chars = max_chars

    def assemble(self, selection: list[Candidate]) -> AssembledContext:
        """Render the ranker's selection into a bounded context block.

        Raises:
            NoRelevantContentError: If the selection is empty.
        """
        if not selection:
            raise NoRelevantContentError("No chapters selected for the context")

        kept = sorted(selection, key=lambda c: (-c.similarity, c.chapter.order))
        dropped: list[Candidate] = []
        while len(kept) > 1 and len(render_context(kept)) > self.max_chars:
            dropped.append(kept.pop())

        narrative = sorted(kept, key=lambda c: c.chapter.order)
        text = render_context(narrative)
        truncated = len(text) > self.max_chars
        if truncated:
            text = text[: self.max_chars]

        if dropped or truncated:
            logger.info(
                "Context over %d chars: dropped chapters %s%s",
                self.max_chars,
                [c.chapter.order for c in dropped],
                f", truncated chapter {narrative[0].chapter.order}" if truncated else "",
            )

        return AssembledContext(text=text, chapters=narrative, dropped=dropped, truncated=truncated)
