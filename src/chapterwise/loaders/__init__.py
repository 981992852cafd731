"""Book loading for Chapterwise."""

from chapterwise.loaders.base import Loader
from chapterwise.loaders.text import TextBookLoader

__all__ = ["Loader", "TextBookLoader"]
