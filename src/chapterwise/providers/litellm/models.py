# src/chapterwise/providers/litellm/models.py
"""Curated model constants for the LiteLLM provider.

These are convenience constants for IDE autocomplete. Any valid LiteLLM model
string can be passed directly instead.

Example:
    from chapterwise.providers.litellm import ChatModels, LiteLLMClient

    llm_client = LiteLLMClient(model=ChatModels.GPT_5_MINI)
    llm_client = LiteLLMClient(model="my-custom/model")
"""


class ChatModels:
    """Chat models for answer generation (via LiteLLMClient)."""

    # Groq
    GROQ_LLAMA_4_SCOUT = "groq/meta-llama/llama-4-scout-17b-16e-instruct"
    GROQ_LLAMA_33_70B = "groq/llama-3.3-70b-versatile"

    # OpenAI
    GPT_5_MINI = "openai/gpt-5-mini"
    GPT_5_NANO = "openai/gpt-5-nano"

    # Anthropic
    CLAUDE_HAIKU_45 = "anthropic/claude-haiku-4-5-20251001"
    CLAUDE_SONNET_45 = "anthropic/claude-sonnet-4-5-20250929"

    # Google Gemini
    GEMINI_3_FLASH = "gemini/gemini-3-flash-preview"

    # Local
    OLLAMA_LLAMA_32 = "ollama/llama3.2"


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient / ClientEmbedder."""

    # Hugging Face Inference API (1024 dimensions)
    HF_BGE_LARGE_EN = "huggingface/BAAI/bge-large-en-v1.5"

    # OpenAI
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"

    # Google Gemini
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"

    # Local
    OLLAMA_NOMIC = "ollama/nomic-embed-text"
