# tests/commands/test_ask_cmd.py
"""Tests for the ask and answer commands."""

from chapterwise.commands import ask, ingest
from chapterwise.models import QuestionStatus


def _ingest(book_file) -> None:
    result = ingest.ingest(path=book_file, title_id="ashworth", data_dir="data")
    assert result.success


class TestAskCommand:
    def test_ask_answers_within_limit(self, offline_chapterwise, book_file, mock_llm) -> None:
        _ingest(book_file)

        result = ask.ask("ashworth", "Who committed the murder?", 2, data_dir="data")

        assert result.success is True
        assert result.answer == "The butler is a suspect."
        assert result.status == QuestionStatus.ANSWERED.value
        assert result.chapter_limit == 2
        assert [c.order for c in result.chapters] == [1, 2]
        assert result.question_id
        assert "SPOILER-GARDENER" not in mock_llm.prompt

    def test_ask_unknown_title_fails(self, offline_chapterwise) -> None:
        result = ask.ask("no-such-title", "Anything?", 3, data_dir="data")

        assert result.success is False
        assert "ChaptersNotFoundError" in result.error
        assert result.status == QuestionStatus.FAILED.value
        assert result.question_id is not None

    def test_ask_zero_limit_fails(self, offline_chapterwise, book_file, mock_llm) -> None:
        _ingest(book_file)

        result = ask.ask("ashworth", "Who?", 0, data_dir="data")

        assert result.success is False
        assert "NoRelevantContentError" in result.error
        assert mock_llm.calls == []

    def test_ask_provider_error(self, offline_chapterwise, book_file, mock_llm) -> None:
        from chapterwise.exceptions import ProviderError

        _ingest(book_file)
        mock_llm.error = ProviderError("service unavailable")

        result = ask.ask("ashworth", "Who?", 2, data_dir="data")

        assert result.success is False
        assert "service unavailable" in result.error


class TestAnswerCommand:
    def test_rerun_failed_question(self, offline_chapterwise, book_file, mock_llm) -> None:
        from chapterwise.exceptions import ProviderError

        _ingest(book_file)
        mock_llm.error = ProviderError("down")
        failed = ask.ask("ashworth", "Who found the body?", 2, data_dir="data")
        assert failed.status == QuestionStatus.FAILED.value

        mock_llm.error = None
        result = ask.answer(failed.question_id, data_dir="data")

        assert result.success is True
        assert result.status == QuestionStatus.ANSWERED.value
        assert result.question == "Who found the body?"

    def test_unknown_question(self, offline_chapterwise) -> None:
        result = ask.answer("missing-id", data_dir="data")

        assert result.success is False
        assert "Question not found" in result.error
        assert result.status is None


class TestAskConfiguration:
    def test_unescaped_prompt_braces_reported(self, offline_chapterwise, mock_llm) -> None:
        (offline_chapterwise / "chapterwise.yaml").write_text(
            "settings:\n"
            "  answer_prompt: 'Context {context} Q {question} reply as JSON {\"a\": 1}'\n"
        )

        result = ask.ask("ashworth", "Who?", 2, data_dir="data")

        assert result.success is False
        assert "Invalid settings" in result.error
        assert "answer_prompt" in result.error
        assert mock_llm.calls == []
