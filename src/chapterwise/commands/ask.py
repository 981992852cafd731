"""Ask and answer commands - record a question and run the answer pipeline.

This module provides the core question logic that the CLI uses.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from chapterwise.commands.base import AnswerCommandResult, ChapterRef
from chapterwise.config import ConfigError, create_chapterwise, get_app_config
from chapterwise.exceptions import ChapterwiseError

if TYPE_CHECKING:
    from chapterwise.chapterwise import Chapterwise
    from chapterwise.models import Candidate

DEFAULT_USER_ID = "local"


def _ref(candidate: Candidate) -> ChapterRef:
    return ChapterRef(
        order=candidate.chapter.order,
        name=candidate.chapter.name,
        similarity=candidate.similarity,
    )


def _load(
    data_dir: str | None,
    config_path: str | Path | None,
) -> Chapterwise | str:
    config = get_app_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config.message
    try:
        return create_chapterwise(config)
    except Exception as e:
        return f"Failed to create Chapterwise: {e}"


def ask(
    title_id: str,
    question: str,
    chapter_limit: int | None,
    user_id: str = DEFAULT_USER_ID,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AnswerCommandResult:
    """Record a question about a title and answer it within the chapter limit.

    The question is stored before the pipeline runs, so a failed run leaves a
    question with status failed that `answer` can re-run.

    Args:
        title_id: Title the question is about
        question: The question text
        chapter_limit: Last chapter the reader has read
        user_id: Who is asking
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        AnswerCommandResult with the answer and the chapters it used
    """
    cw = _load(data_dir, config_path)
    if isinstance(cw, str):
        return AnswerCommandResult(success=False, error=cw, question=question)

    stored = cw.ask(user_id, title_id, question, chapter_limit)
    return answer_with_chapterwise(cw, stored.id)


def answer(
    question_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AnswerCommandResult:
    """Re-run the answer pipeline for a stored question.

    Args:
        question_id: ID of a stored question (any status)
        data_dir: Override data directory
        config_path: Override config file path
    """
    cw = _load(data_dir, config_path)
    if isinstance(cw, str):
        return AnswerCommandResult(success=False, error=cw, question_id=question_id)
    return answer_with_chapterwise(cw, question_id)


def answer_with_chapterwise(cw: Chapterwise, question_id: str) -> AnswerCommandResult:
    """Run the answer pipeline using an existing Chapterwise instance."""
    try:
        result = cw.answer_question(question_id)
    except ChapterwiseError as e:
        stored = cw.get_question(question_id)
        return AnswerCommandResult(
            success=False,
            error=f"{type(e).__name__}: {e}",
            question_id=question_id,
            question=stored.question_text if stored else "",
            chapter_limit=stored.chapter_limit if stored else None,
            status=stored.status.value if stored else None,
        )

    stored = cw.get_question(question_id)
    return AnswerCommandResult(
        success=True,
        question_id=question_id,
        question=stored.question_text if stored else "",
        chapter_limit=stored.chapter_limit if stored else None,
        status=stored.status.value if stored else None,
        answer=result.answer_text,
        chapters=[_ref(c) for c in result.chapters],
        dropped=[_ref(c) for c in result.dropped],
    )
