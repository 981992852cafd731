"""Storage configurations for Chapterwise."""

from chapterwise.configuration.storage.local import LocalStorage

__all__ = ["LocalStorage"]
