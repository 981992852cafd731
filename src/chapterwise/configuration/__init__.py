"""Configuration objects for Chapterwise.

Instead of factory methods, you pass configuration objects that know how to
build their components.

Provider configurations (build AI components):
- LiteLLMProvider: Uses LiteLLM for chat completion and embedding calls

Storage configurations (build data stores):
- LocalStorage: SQLite files in a local directory

Example:
    from chapterwise import Chapterwise, LiteLLMProvider, LocalStorage

    cw = Chapterwise(
        provider=LiteLLMProvider(
            llm="groq/meta-llama/llama-4-scout-17b-16e-instruct",
            embedding="huggingface/BAAI/bge-large-en-v1.5",
        ),
        storage=LocalStorage("./data"),
    )
"""

from chapterwise.configuration.base import ProviderConfig, StorageConfig
from chapterwise.configuration.providers import LiteLLMProvider
from chapterwise.configuration.storage import LocalStorage

__all__ = [
    "ProviderConfig",
    "StorageConfig",
    "LiteLLMProvider",
    "LocalStorage",
]
