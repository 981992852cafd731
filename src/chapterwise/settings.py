"""Configuration management for Chapterwise.

This module contains behavioral settings that apply regardless of which
LLM provider is used. Settings are passed programmatically - the library
does not read from environment variables.

For applications that want env-based config, read env vars at the
application layer (see chapterwise.config) and pass values explicitly.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

from chapterwise.prompts import validate_template


class Settings(BaseModel):
    """Behavioral settings for Chapterwise.

    Example:
        settings = Settings(top_k=3, max_context_chars=12_000)
    """

    # Retrieval
    top_k: int = 5
    embedding_dimension: int | None = None  # None = take it from stored embeddings

    # Context and prompt
    max_context_chars: int = 24_000
    answer_prompt: str | None = None

    # Generation
    synthesis_temperature: float | None = 0.2
    max_answer_tokens: int | None = 1000

    # Provider calls. Retries default to 0: a failed run is retried by
    # re-invoking the whole pipeline, not inside it.
    request_timeout: float | None = 30.0
    num_retries: int = 0

    # Question lifecycle
    run_lease_seconds: float = 300.0

    # Ingestion
    embed_batch_size: int = 16

    @field_validator("top_k", "max_context_chars", "embed_batch_size")
    @classmethod
    def _positive_int(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("embedding_dimension", "max_answer_tokens")
    @classmethod
    def _positive_optional_int(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("must be at least 1 when set")
        return value

    @field_validator("request_timeout", "run_lease_seconds")
    @classmethod
    def _positive_seconds(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("must be greater than 0")
        return value

    @field_validator("num_retries")
    @classmethod
    def _non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("must not be negative")
        return value

    @field_validator("answer_prompt")
    @classmethod
    def _valid_template(cls, value: str | None) -> str | None:
        return validate_template(value) if value is not None else None

    @field_validator("synthesis_temperature")
    @classmethod
    def _temperature_range(cls, value: float | None) -> float | None:
        if value is not None and not 0.0 <= value <= 2.0:
            raise ValueError("must be between 0.0 and 2.0")
        return value
