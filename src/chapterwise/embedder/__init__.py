# src/chapterwise/embedder/__init__.py
"""Embedding functionality for Chapterwise."""

from chapterwise.embedder.base import Embedder, chapter_text
from chapterwise.embedder.client import ClientEmbedder

__all__ = ["Embedder", "ClientEmbedder", "chapter_text"]
