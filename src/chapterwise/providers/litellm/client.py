# src/chapterwise/providers/litellm/client.py
"""LiteLLM client implementations for chat completion and embedding APIs."""

import logging
from typing import Any

import litellm

from chapterwise.exceptions import EmptyResponseError, ProviderError, ProviderTimeoutError
from chapterwise.providers.base import EmbeddingClient, LLMClient
from chapterwise.providers.litellm.models import ChatModels, EmbeddingModels

logger = logging.getLogger(__name__)


def _extract_content(response: Any, model: str) -> str:
    if not response.choices:
        raise EmptyResponseError(f"LLM returned no choices for model {model}")
    content = response.choices[0].message.content
    if content is None or not str(content).strip():
        raise EmptyResponseError(f"LLM returned empty content for model {model}")
    return str(content)


def _wrap_error(error: Exception, model: str, operation: str) -> ProviderError:
    logger.warning("%s call to %s failed: %s", operation, model, error)
    if isinstance(error, litellm.Timeout):
        return ProviderTimeoutError(f"{operation} call to {model} timed out", model=model)
    return ProviderError(f"{operation} call to {model} failed: {error}", model=model)


class LiteLLMClient(LLMClient):
    """LiteLLM-based client for chat completion.

    Supports any model available through LiteLLM (Groq, OpenAI, Anthropic,
    Gemini, Ollama, etc.).

    Example:
        from chapterwise.providers.litellm import LiteLLMClient, ChatModels

        client = LiteLLMClient(model=ChatModels.GROQ_LLAMA_4_SCOUT)
        response = client.complete([{"role": "user", "content": "Hello"}])
    """

    def __init__(
        self,
        model: str = ChatModels.GROQ_LLAMA_4_SCOUT,
        num_retries: int = 0,
        timeout: float | None = 30.0,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> None:
        """Initialize the LiteLLM client.

        Args:
            model: LiteLLM model identifier.
                   Examples: "groq/meta-llama/llama-4-scout-17b-16e-instruct", "openai/gpt-5-mini"
            num_retries: Retries LiteLLM performs on transient errors. Default 0:
                         the answer pipeline leaves retry policy to its caller.
            timeout: Per-request timeout in seconds (None for the LiteLLM default).
            api_key: Optional API key. If None, LiteLLM reads the provider's env var.
            api_base: Optional base URL override (e.g. a self-hosted gateway).
        """
        self.model = model
        self.num_retries = num_retries
        self.timeout = timeout
        self.api_key = api_key
        self.api_base = api_base

    def _completion_kwargs(
        self,
        messages: list[dict],
        temperature: float | None,
        max_tokens: int | None,
    ) -> dict[str, Any]:
        completion_kwargs: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "drop_params": True,
            "num_retries": self.num_retries,
        }
        if temperature is not None:
            completion_kwargs["temperature"] = temperature
        if max_tokens is not None:
            completion_kwargs["max_tokens"] = max_tokens
        if self.timeout is not None:
            completion_kwargs["timeout"] = self.timeout
        if self.api_key:
            completion_kwargs["api_key"] = self.api_key
        if self.api_base:
            completion_kwargs["api_base"] = self.api_base
        return completion_kwargs

    def complete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using LiteLLM."""
        try:
            response = litellm.completion(
                **self._completion_kwargs(messages, temperature, max_tokens)
            )
        except Exception as e:
            raise _wrap_error(e, self.model, "Completion") from e
        return _extract_content(response, self.model)

    async def acomplete(
        self,
        messages: list[dict],
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a completion using LiteLLM (async)."""
        try:
            response = await litellm.acompletion(
                **self._completion_kwargs(messages, temperature, max_tokens)
            )
        except Exception as e:
            raise _wrap_error(e, self.model, "Completion") from e
        return _extract_content(response, self.model)


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Example:
        from chapterwise.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.HF_BGE_LARGE_EN)
        embeddings = client.embed(["Who is Ishmael?", "Where does the Pequod sail?"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.HF_BGE_LARGE_EN,
        num_retries: int = 0,
        timeout: float | None = 30.0,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "huggingface/BAAI/bge-large-en-v1.5", "openai/text-embedding-3-small"
            num_retries: Retries LiteLLM performs on transient errors. Default 0.
            timeout: Per-request timeout in seconds (None for the LiteLLM default).
            api_key: Optional API key. If None, LiteLLM reads the provider's env var.
            api_base: Optional base URL override.
        """
        self.model = model
        self.num_retries = num_retries
        self.timeout = timeout
        self.api_key = api_key
        self.api_base = api_base

    def _embedding_kwargs(self, texts: list[str]) -> dict[str, Any]:
        embedding_kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
            "num_retries": self.num_retries,
        }
        if self.timeout is not None:
            embedding_kwargs["timeout"] = self.timeout
        if self.api_key:
            embedding_kwargs["api_key"] = self.api_key
        if self.api_base:
            embedding_kwargs["api_base"] = self.api_base
        return embedding_kwargs

    def _parse(self, response: Any, expected: int) -> list[list[float]]:
        # Sort by index to maintain order
        sorted_data = sorted(response.data, key=lambda x: x["index"])
        embeddings = [list(item["embedding"]) for item in sorted_data]
        if len(embeddings) != expected:
            raise ProviderError(
                f"Embedding call to {self.model} returned {len(embeddings)} vectors "
                f"for {expected} inputs",
                model=self.model,
            )
        return embeddings

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM."""
        if not texts:
            return []

        try:
            response = litellm.embedding(**self._embedding_kwargs(texts))
        except Exception as e:
            raise _wrap_error(e, self.model, "Embedding") from e
        return self._parse(response, len(texts))

    async def aembed(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings using LiteLLM (async)."""
        if not texts:
            return []

        try:
            response = await litellm.aembedding(**self._embedding_kwargs(texts))
        except Exception as e:
            raise _wrap_error(e, self.model, "Embedding") from e
        return self._parse(response, len(texts))
