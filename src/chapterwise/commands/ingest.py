"""Ingest command - split a book into chapters and index them.

This module provides the core ingest logic that the CLI uses.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from chapterwise.commands.base import (
    CommandStage,
    IngestResult,
    ProgressCallback,
    ProgressUpdate,
)
from chapterwise.config import ConfigError, create_chapterwise, get_app_config
from chapterwise.exceptions import ChapterwiseError

if TYPE_CHECKING:
    from chapterwise.chapterwise import Chapterwise


# Map internal stage names to CommandStage
STAGE_MAP = {
    "storing": CommandStage.STORING,
    "embedding": CommandStage.EMBEDDING,
}


def ingest(
    path: str | Path,
    title_id: str,
    data_dir: str | None = None,
    config_path: str | Path | None = None,
    replace: bool = True,
    on_progress: ProgressCallback | None = None,
) -> IngestResult:
    """Ingest a book file under the given title.

    Args:
        path: Book file to ingest
        title_id: Title the chapters belong to
        data_dir: Override data directory (uses config if not provided)
        config_path: Override config file path
        replace: Replace the title's existing chapters
        on_progress: Callback for progress updates during ingestion

    Returns:
        IngestResult with chapter and embedding counts
    """
    path = Path(path)

    if not path.is_file():
        return IngestResult(
            success=False,
            error=f"File not found: {path}",
            filepath=str(path),
            title_id=title_id,
        )

    config = get_app_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return IngestResult(success=False, error=config.message, filepath=str(path))

    try:
        cw = create_chapterwise(config)
    except Exception as e:
        return IngestResult(
            success=False,
            error=f"Failed to create Chapterwise: {e}",
            filepath=str(path),
        )

    return ingest_with_chapterwise(cw, path, title_id, replace=replace, on_progress=on_progress)


def ingest_with_chapterwise(
    cw: Chapterwise,
    path: str | Path,
    title_id: str,
    replace: bool = True,
    on_progress: ProgressCallback | None = None,
) -> IngestResult:
    """Ingest a book file using an existing Chapterwise instance."""

    def progress_adapter(event: str, current: int, total: int, message: str) -> None:
        if on_progress:
            stage = STAGE_MAP.get(event, CommandStage.PROCESSING)
            on_progress(ProgressUpdate(stage=stage, current=current, total=total, message=message))

    filepath = str(path)
    if on_progress:
        on_progress(ProgressUpdate(CommandStage.LOADING, 0, 0, f"Loading {filepath}"))

    try:
        stats = cw.ingest_book(
            filepath,
            title_id,
            replace=replace,
            on_progress=progress_adapter if on_progress else None,
        )
    except (OSError, ValueError, ChapterwiseError) as e:
        return IngestResult(
            success=False,
            error=f"{type(e).__name__}: {e}",
            filepath=filepath,
            title_id=title_id,
        )

    if stats.get("skipped"):
        return IngestResult(
            success=True,
            error=f"Skipped: {stats.get('reason', 'no content')}",
            filepath=filepath,
            title_id=title_id,
            skipped=True,
        )

    if on_progress:
        on_progress(ProgressUpdate(CommandStage.COMPLETE, 1, 1, "Done"))

    return IngestResult(
        success=True,
        filepath=filepath,
        title_id=title_id,
        chapters=stats.get("chapters", 0),
        embeddings=stats.get("embeddings", 0),
        dimension=stats.get("dimension"),
    )
