# tests/test_prompts.py
"""Tests for prompt construction."""

import pytest

from chapterwise.prompts import REFUSAL_PHRASE, build_messages, validate_template


class TestBuildMessages:
    def test_system_then_user(self):
        messages = build_messages("Chapter 1\nText", "Who?", 3)
        assert [m["role"] for m in messages] == ["system", "user"]

    def test_user_message_contents(self):
        question = "Who opened the letter?  (exact wording)"
        messages = build_messages("Chapter 1: Start\nA letter.", question, 7)
        user = messages[1]["content"]

        assert "Chapter 1: Start\nA letter." in user
        assert question in user
        assert "chapter 7" in user
        assert REFUSAL_PHRASE in user

    def test_system_message_restricts_sources(self):
        system = build_messages("ctx", "q", 1)[0]["content"]
        assert "ONLY" in system

    def test_custom_template(self):
        template = "{context}|{question}|{chapter_limit}|{refusal}"
        messages = build_messages("CTX", "Q?", 2, template=template)
        assert messages[1]["content"] == f"CTX|Q?|2|{REFUSAL_PHRASE}"

    def test_braces_in_question_are_kept(self):
        messages = build_messages("ctx", "What does {curly} mean?", 1)
        assert "What does {curly} mean?" in messages[1]["content"]


class TestValidateTemplate:
    def test_valid_template_returned(self):
        template = "{context}\n{question}\nUp to {chapter_limit}. Else: {refusal}"
        assert validate_template(template) == template

    def test_escaped_braces_allowed(self):
        template = '{context} {question} reply as JSON {{"answer": "..."}}'
        assert validate_template(template) == template
        content = build_messages("CTX", "Q?", 1, template=template)[1]["content"]
        assert content == 'CTX Q? reply as JSON {"answer": "..."}'

    def test_literal_braces_rejected(self):
        with pytest.raises(ValueError, match="unknown prompt template field"):
            validate_template('Context {context} Q {question} reply as JSON {"a": 1}')

    @pytest.mark.parametrize("template", ["{question} only", "{context} only", "no fields"])
    def test_required_fields(self, template):
        with pytest.raises(ValueError, match="must contain"):
            validate_template(template)

    @pytest.mark.parametrize("template", ["{context} {question} {", "{context} {question} }"])
    def test_unbalanced_braces_rejected(self, template):
        with pytest.raises(ValueError, match="malformed"):
            validate_template(template)

    @pytest.mark.parametrize("template", ["{context} {question} {0}", "{context.x} {question}"])
    def test_other_fields_rejected(self, template):
        with pytest.raises(ValueError, match="unknown"):
            validate_template(template)
