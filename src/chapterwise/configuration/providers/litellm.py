"""LiteLLM provider configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chapterwise.embedder import Embedder
    from chapterwise.providers import LLMClient
    from chapterwise.settings import Settings


@dataclass(frozen=True)
class LiteLLMProvider:
    """Provider configuration using LiteLLM for chat and embedding calls.

    Args:
        llm: LiteLLM model identifier for answer generation.
             Examples: "groq/meta-llama/llama-4-scout-17b-16e-instruct", "openai/gpt-5-mini"
        embedding: LiteLLM model identifier for embeddings. Must be the model the
                   stored chapter embeddings were computed with.
                   Examples: "huggingface/BAAI/bge-large-en-v1.5", "openai/text-embedding-3-small"
        llm_api_key: Optional API key for the chat model (else LiteLLM reads env vars).
        embedding_api_key: Optional API key for the embedding model.
        llm_api_base: Optional base URL for the chat model.
        embedding_api_base: Optional base URL for the embedding model.

    Example:
        provider = LiteLLMProvider(
            llm="groq/meta-llama/llama-4-scout-17b-16e-instruct",
            embedding="huggingface/BAAI/bge-large-en-v1.5",
        )
    """

    llm: str
    embedding: str
    llm_api_key: str | None = None
    embedding_api_key: str | None = None
    llm_api_base: str | None = None
    embedding_api_base: str | None = None

    def build_embedder(self, settings: Settings) -> Embedder:
        """Build a ClientEmbedder using the LiteLLM embedding client.

        Args:
            settings: Settings containing request_timeout and num_retries.
        """
        from chapterwise.embedder import ClientEmbedder
        from chapterwise.providers.litellm import LiteLLMEmbeddingClient

        embedding_client = LiteLLMEmbeddingClient(
            model=self.embedding,
            num_retries=settings.num_retries,
            timeout=settings.request_timeout,
            api_key=self.embedding_api_key,
            api_base=self.embedding_api_base,
        )
        return ClientEmbedder(embedding_client=embedding_client)

    def build_llm_client(self, settings: Settings) -> LLMClient:
        """Build a LiteLLMClient for answer generation.

        Args:
            settings: Settings containing request_timeout and num_retries.
        """
        from chapterwise.providers.litellm import LiteLLMClient

        return LiteLLMClient(
            model=self.llm,
            num_retries=settings.num_retries,
            timeout=settings.request_timeout,
            api_key=self.llm_api_key,
            api_base=self.llm_api_base,
        )
