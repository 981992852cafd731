"""Provider configurations for Chapterwise."""

from chapterwise.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
