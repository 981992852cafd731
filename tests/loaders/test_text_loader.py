# tests/loaders/test_text_loader.py
"""Tests for the plain text book loader."""

import os
import tempfile

import pytest

from chapterwise.loaders import Loader, TextBookLoader
from chapterwise.models import Chapter

BOOK = """The Ashworth Affair
A novel

Chapter 1: The Garden Party
Lady Ashworth hosts a party.

Guests arrive.

CHAPTER II. A Body in the Library
Lord Ashworth is found dead.

# Chapter Three
The inspector arrives.
"""


@pytest.fixture
def temp_dir():
    """Create a temporary directory with test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        with open(os.path.join(tmpdir, "book.txt"), "w", encoding="utf-8") as f:
            f.write(BOOK)

        with open(os.path.join(tmpdir, "empty.txt"), "w") as f:
            f.write("   \n")

        yield tmpdir


class TestTextBookLoader:
    def test_is_loader(self):
        assert isinstance(TextBookLoader(), Loader)

    @pytest.mark.parametrize("path", ["book.txt", "book.md", "book.markdown", "BOOK.TXT"])
    def test_supports_text_formats(self, path):
        assert TextBookLoader().supports(path) is True

    @pytest.mark.parametrize("path", ["book.pdf", "book.epub", "book"])
    def test_does_not_support_other_formats(self, path):
        assert TextBookLoader().supports(path) is False

    def test_load_book(self, temp_dir):
        chapters = TextBookLoader().load(os.path.join(temp_dir, "book.txt"), "ashworth")

        assert all(isinstance(c, Chapter) for c in chapters)
        assert [c.order for c in chapters] == [1, 2, 3]
        assert [c.name for c in chapters] == [
            "The Garden Party",
            "A Body in the Library",
            "",
        ]
        assert all(c.title_id == "ashworth" for c in chapters)

    def test_front_matter_dropped(self, temp_dir):
        chapters = TextBookLoader().load(os.path.join(temp_dir, "book.txt"), "ashworth")
        assert all("A novel" not in c.content for c in chapters)

    def test_content_keeps_paragraphs(self, temp_dir):
        chapters = TextBookLoader().load(os.path.join(temp_dir, "book.txt"), "ashworth")
        assert chapters[0].content == "Lady Ashworth hosts a party.\n\nGuests arrive."
        assert chapters[2].content == "The inspector arrives."

    def test_load_empty_file(self, temp_dir):
        assert TextBookLoader().load(os.path.join(temp_dir, "empty.txt"), "t") == []

    def test_load_nonexistent_file(self):
        with pytest.raises(FileNotFoundError):
            TextBookLoader().load("/nonexistent/path/book.txt", "t")

    def test_order_follows_file_position_not_heading_number(self):
        text = "Chapter 7\nFirst.\nChapter 2\nSecond."
        chapters = TextBookLoader().split_chapters(text, "t")
        assert [(c.order, c.content) for c in chapters] == [(1, "First."), (2, "Second.")]

    def test_number_word_heading(self):
        chapters = TextBookLoader().split_chapters("Chapter Twenty-One.\nLate.", "t")
        assert len(chapters) == 1
        assert chapters[0].name == ""
        assert chapters[0].content == "Late."

    def test_roman_numeral_heading(self):
        text = "CHAPTER IV: The Storm\nRain.\nChapter xii\nSun."
        chapters = TextBookLoader().split_chapters(text, "t")
        assert [(c.order, c.name) for c in chapters] == [(1, "The Storm"), (2, "")]

    @pytest.mark.parametrize("word", ["civil", "mild", "dim", "did"])
    def test_roman_letter_words_are_prose(self, word):
        prose = f"Chapter {word} unrest begins"
        chapters = TextBookLoader().split_chapters(f"Chapter 1\nStart.\n{prose}", "t")
        assert len(chapters) == 1
        assert prose in chapters[0].content

    def test_no_headings_is_single_chapter(self):
        chapters = TextBookLoader().split_chapters("  Just one long story.  \n", "t")
        assert len(chapters) == 1
        assert chapters[0].order == 1
        assert chapters[0].content == "Just one long story."

    def test_long_line_is_not_a_heading(self):
        prose = "Chapter 4 " + "and then it went on " * 10 + "forever."
        chapters = TextBookLoader().split_chapters(f"Chapter 1\nStart.\n{prose}", "t")
        assert len(chapters) == 1
        assert prose in chapters[0].content

    def test_unique_ids(self, temp_dir):
        chapters = TextBookLoader().load(os.path.join(temp_dir, "book.txt"), "ashworth")
        ids = [c.id for c in chapters]
        assert len(ids) == len(set(ids))
