"""Plain text and Markdown book loader."""

import re
from pathlib import Path

from chapterwise.loaders.base import Loader
from chapterwise.models import Chapter

_UNITS = "one|two|three|four|five|six|seven|eight|nine"
_TEENS = "ten|eleven|twelve|thirteen|fourteen|fifteen|sixteen|seventeen|eighteen|nineteen"
_TENS = "twenty|thirty|forty|fifty|sixty|seventy|eighty|ninety"
_NUMBER_WORDS = rf"(?:{_TENS})(?:[-\s](?:{_UNITS}))?|{_TEENS}|{_UNITS}"
_ROMAN = r"m{0,3}(?:cm|cd|d?c{0,3})(?:xc|xl|l?x{0,3})(?:ix|iv|v?i{0,3})(?<=[ivxlcdm])"

# "Chapter 3", "CHAPTER IV: The Storm", "# Chapter 12 - Title", "Chapter Twenty-One."
CHAPTER_HEADING = re.compile(
    rf"^\s*(?:#{{1,6}}\s*)?chapter\s+(?:\d+|{_ROMAN}|{_NUMBER_WORDS})\b"
    r"\s*[:.\-–—]?\s*(?P<name>.*?)\s*\.?\s*$",
    re.IGNORECASE,
)

# Longer lines are prose that happens to start with "Chapter ...".
MAX_HEADING_LENGTH = 120


class TextBookLoader(Loader):
    """Load plain text and markdown books, one Chapter per chapter heading.

    Chapter order is the 1-based position of the heading in the file; the
    number written in the heading is not trusted. Text before the first
    heading (front matter) is dropped. A file without any heading becomes a
    single chapter.
    """

    SUPPORTED_EXTENSIONS = {".txt", ".md", ".markdown", ".text"}

    def supports(self, path: str) -> bool:
        """Check if this loader supports the given file."""
        return Path(path).suffix.lower() in self.SUPPORTED_EXTENSIONS

    def load(self, path: str, title_id: str) -> list[Chapter]:
        """Load a book file and return its chapters."""
        file_path = Path(path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        content = file_path.read_text(encoding="utf-8")
        if not content.strip():
            return []

        return self.split_chapters(content, title_id)

    def split_chapters(self, text: str, title_id: str) -> list[Chapter]:
        """Split book text into chapters on heading lines."""
        sections: list[tuple[str, list[str]]] = []
        for line in text.splitlines():
            match = None
            if len(line) <= MAX_HEADING_LENGTH:
                match = CHAPTER_HEADING.match(line)
            if match:
                sections.append((match.group("name").strip(), []))
            elif sections:
                sections[-1][1].append(line)

        if not sections:
            return [Chapter(title_id=title_id, order=1, name="", content=text.strip())]

        return [
            Chapter(title_id=title_id, order=i, name=name, content="\n".join(body).strip())
            for i, (name, body) in enumerate(sections, 1)
        ]
