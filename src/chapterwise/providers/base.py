# src/chapterwise/providers/base.py
"""Abstract base classes for LLM and embedding providers."""

from abc import ABC, abstractmethod


class LLMClient(ABC):
    """Abstract base class for chat completion providers.

    Implementations must raise ProviderError (or ProviderTimeoutError) when the
    call fails, and EmptyResponseError when the provider returns no content.

    Example:
        class MyLLMClient(LLMClient):
            def complete(self, messages, temperature=None, max_tokens=None):
                return my_api.chat(messages, temp=temperature, limit=max_tokens)
    """

    @abstractmethod
    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for the given messages.

        Args:
            messages: List of message dicts with 'role' and 'content' keys.
                      Example: [{"role": "user", "content": "Hello"}]
            temperature: Optional sampling temperature. If None, use provider default.
            max_tokens: Optional cap on generated tokens. If None, use provider default.

        Returns:
            The generated text response.
        """
        ...

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion for the given messages (async).

        Default implementation calls sync complete().
        Override in subclasses for true async behavior.
        """
        return self.complete(messages, temperature, max_tokens)


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def embed(self, texts):
                return my_api.embed_batch(texts)
    """

    @abstractmethod
    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts.

        Args:
            texts: List of texts to embed.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).
        """
        ...

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors (async). Defaults to the sync embed()."""
        return self.embed(texts)
