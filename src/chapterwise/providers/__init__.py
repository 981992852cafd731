# src/chapterwise/providers/__init__.py
"""Provider implementations for Chapterwise.

This module contains LLM and embedding provider abstractions:
- LLMClient: Abstract base class for chat completion providers
- EmbeddingClient: Abstract base class for embedding providers
- LiteLLM implementations of both

Usage:
    from chapterwise.providers import LLMClient, EmbeddingClient
    from chapterwise.providers.litellm import LiteLLMClient, ChatModels
"""

from chapterwise.providers.base import EmbeddingClient, LLMClient
from chapterwise.providers.litellm import (
    ChatModels,
    EmbeddingModels,
    LiteLLMClient,
    LiteLLMEmbeddingClient,
)

__all__ = [
    # ABCs
    "LLMClient",
    "EmbeddingClient",
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # LiteLLM clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
