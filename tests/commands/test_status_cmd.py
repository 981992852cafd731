# tests/commands/test_status_cmd.py
"""Tests for the status command."""

from chapterwise.commands import ask, ingest, status


class TestStatusCommand:
    def test_status_nonexistent_directory(self, isolated_env) -> None:
        result = status.status(data_dir=str(isolated_env / "nope"))

        assert result.success is True
        assert result.total_titles == 0
        assert result.total_chapters == 0
        assert result.total_questions == 0

    def test_status_empty_database(self, isolated_env) -> None:
        data_dir = isolated_env / "data"
        data_dir.mkdir()

        result = status.status(data_dir=str(data_dir))

        assert result.success is True
        assert result.total_chapters == 0
        assert result.questions_by_status == {"pending": 0, "answered": 0, "failed": 0}

    def test_status_counts(self, offline_chapterwise, book_file) -> None:
        ingest.ingest(path=book_file, title_id="ashworth", data_dir="data")
        ask.ask("ashworth", "Who?", 2, data_dir="data")

        result = status.status(data_dir="data", detailed=True)

        assert result.total_titles == 1
        assert result.total_chapters == 3
        assert result.total_embeddings == 3
        assert result.total_questions == 1
        assert result.questions_by_status["answered"] == 1
        assert len(result.titles) == 1
        assert result.titles[0].title_id == "ashworth"
        assert result.titles[0].chapter_count == 3

    def test_status_not_detailed_has_no_titles(self, offline_chapterwise, book_file) -> None:
        ingest.ingest(path=book_file, title_id="ashworth", data_dir="data")

        assert status.status(data_dir="data").titles == []
