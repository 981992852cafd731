# tests/commands/test_config_cmd.py
"""Tests for the config command."""

from chapterwise.commands import config_cmd


def _setting(result, name):
    return next(s for s in result.settings if s.name == name)


class TestConfigCommand:
    def test_defaults_without_config_file(self, isolated_env) -> None:
        result = config_cmd.config()

        assert result.success is True
        assert result.config_path is None
        assert result.provider == "litellm"
        assert result.llm_model == "groq/meta-llama/llama-4-scout-17b-16e-instruct"
        assert _setting(result, "top_k").value == "5"
        assert _setting(result, "top_k").source == "default"
        assert _setting(result, "embedding_dimension").value == "not set"
        assert _setting(result, "answer_prompt").value == "built-in"

    def test_sources(self, isolated_env, monkeypatch) -> None:
        (isolated_env / "chapterwise.yaml").write_text(
            "settings:\n  top_k: 3\n  max_context_chars: 9000\n  answer_prompt: '{context} {question}'\n"
        )
        monkeypatch.setenv("CHAPTERWISE_TOP_K", "4")

        result = config_cmd.config()

        assert result.config_path is not None
        assert _setting(result, "top_k").value == "4"
        assert _setting(result, "top_k").source == "env var"
        assert _setting(result, "max_context_chars").source == "yaml"
        assert _setting(result, "answer_prompt").value == "custom"

    def test_warnings_for_unknown_keys(self, isolated_env) -> None:
        (isolated_env / "chapterwise.yaml").write_text("vector_store: chroma\n")

        result = config_cmd.config()

        assert result.success is True
        assert any("vector_store" in w for w in result.warnings)

    def test_invalid_settings(self, isolated_env) -> None:
        (isolated_env / "chapterwise.yaml").write_text("settings:\n  top_k: 0\n")

        result = config_cmd.config()

        assert result.success is False
        assert "Invalid settings" in result.error

    def test_unreadable_yaml(self, isolated_env) -> None:
        (isolated_env / "chapterwise.yaml").write_text("settings: {oops\n")

        result = config_cmd.config()

        assert result.success is False
        assert "Could not read config file" in result.error
