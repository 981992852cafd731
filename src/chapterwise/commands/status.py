"""Status command - show database statistics.

This module provides the status logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

from chapterwise.commands.base import StatusResult, TitleInfo
from chapterwise.config import get_stores, load_config, resolve_data_dir
from chapterwise.models import QuestionStatus


def status(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    detailed: bool = False,
) -> StatusResult:
    """Get database statistics.

    Args:
        data_dir: Override data directory
        config_path: Override config file path
        detailed: If True, include per-title breakdown

    Returns:
        StatusResult with database statistics
    """
    config = load_config(config_path)
    effective_data_dir = resolve_data_dir(data_dir, config)

    if not os.path.exists(effective_data_dir):
        return StatusResult(success=True)

    try:
        stores = get_stores(effective_data_dir)
    except Exception as e:
        return StatusResult(
            success=False,
            error=f"Failed to access database: {e}",
        )

    chapter_store = stores["chapter_store"]
    question_store = stores["question_store"]

    titles = chapter_store.list_titles()
    result = StatusResult(
        success=True,
        total_titles=len(titles),
        total_chapters=chapter_store.count_chapters(),
        total_embeddings=chapter_store.count_embeddings(),
        total_questions=question_store.count_questions(),
        questions_by_status={s.value: question_store.count_questions(s) for s in QuestionStatus},
    )

    if detailed:
        for title_id in sorted(titles):
            result.titles.append(
                TitleInfo(
                    title_id=title_id,
                    chapter_count=chapter_store.count_chapters(title_id),
                    embedding_count=chapter_store.count_embeddings(title_id),
                )
            )

    return result
