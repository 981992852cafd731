# src/chapterwise/providers/litellm/__init__.py
"""LiteLLM provider clients for Chapterwise.

- LiteLLMClient: chat completion using LiteLLM
- LiteLLMEmbeddingClient: embeddings using LiteLLM
- ChatModels / EmbeddingModels: curated model constants

Usage:
    from chapterwise.providers.litellm import LiteLLMClient, ChatModels

    client = LiteLLMClient(model=ChatModels.GROQ_LLAMA_4_SCOUT, timeout=20)
"""

from chapterwise.providers.litellm.client import LiteLLMClient, LiteLLMEmbeddingClient
from chapterwise.providers.litellm.models import ChatModels, EmbeddingModels

__all__ = [
    # Model constants
    "ChatModels",
    "EmbeddingModels",
    # Clients
    "LiteLLMClient",
    "LiteLLMEmbeddingClient",
]
