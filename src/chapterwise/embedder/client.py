# src/chapterwise/embedder/client.py
"""Client-based embedder implementation."""

from chapterwise.embedder.base import Embedder
from chapterwise.exceptions import ProviderError
from chapterwise.providers.base import EmbeddingClient


class ClientEmbedder(Embedder):
    """Embedder that uses an EmbeddingClient for generating embeddings.

    Example:
        from chapterwise.providers.litellm import LiteLLMEmbeddingClient
        from chapterwise.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="huggingface/BAAI/bge-large-en-v1.5")
        embedder = ClientEmbedder(embedding_client=client)
    """

    def __init__(self, embedding_client: EmbeddingClient) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
        """
        self._client = embedding_client

    @staticmethod
    def _single(result: list[list[float]]) -> list[float]:
        if not result or not result[0]:
            raise ProviderError("Embedding provider returned no vector")
        return result[0]

    def embed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text."""
        return self._single(self._client.embed([text]))

    async def aembed_text(self, text: str) -> list[float]:
        """Generate an embedding vector for a single text (async)."""
        return self._single(await self._client.aembed([text]))

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts (batched)."""
        return self._client.embed(texts)
