"""Questions command - list stored questions.

This module provides the list logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

from chapterwise.commands.base import QuestionInfo, QuestionsResult
from chapterwise.config import get_stores, load_config, resolve_data_dir
from chapterwise.models import QuestionStatus


def list_questions(
    user_id: str | None = None,
    title_id: str | None = None,
    status: str | None = None,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> QuestionsResult:
    """List stored questions, newest first.

    Args:
        user_id: Only questions asked by this user
        title_id: Only questions about this title
        status: Only questions with this status (pending, answered, failed)
        data_dir: Override data directory
        config_path: Override config file path
    """
    status_filter: QuestionStatus | None = None
    if status:
        try:
            status_filter = QuestionStatus(status.lower())
        except ValueError:
            valid = ", ".join(s.value for s in QuestionStatus)
            return QuestionsResult(
                success=False,
                error=f"Unknown status '{status}'. Expected one of: {valid}",
            )

    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return QuestionsResult(success=True, questions=[])

    try:
        stores = get_stores(effective_data_dir)
    except Exception as e:
        return QuestionsResult(success=False, error=f"Failed to access database: {e}")

    questions = stores["question_store"].list_questions(
        user_id=user_id,
        title_id=title_id,
        status=status_filter,
    )

    return QuestionsResult(
        success=True,
        questions=[
            QuestionInfo(
                question_id=q.id,
                user_id=q.user_id,
                title_id=q.title_id,
                question=q.question_text,
                chapter_limit=q.chapter_limit,
                status=q.status.value,
                answer=q.answer_text,
                created_at=q.created_at.isoformat(timespec="seconds"),
            )
            for q in questions
        ],
    )
