"""Configuration loading utilities for Chapterwise.

This module provides configuration loading that can be used by:
- CLI commands
- External applications using Chapterwise as a library

It handles:
- Finding and loading chapterwise.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Creating Chapterwise instances from configuration
"""

from __future__ import annotations

import importlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypedDict, cast

import yaml
from pydantic import ValidationError

from chapterwise.providers.litellm import ChatModels, EmbeddingModels

if TYPE_CHECKING:
    from chapterwise.chapterwise import Chapterwise
    from chapterwise.settings import Settings
    from chapterwise.stores import SQLiteChapterStore, SQLiteQuestionStore

# Default paths
DEFAULT_DATA_DIR = "./chapterwise_data"
CONFIG_FILES = ["chapterwise.yaml", "chapterwise.yml", ".chapterwiserc"]
ENV_FILE = ".env"

DEFAULT_LLM_MODEL = ChatModels.GROQ_LLAMA_4_SCOUT
DEFAULT_EMBEDDING_MODEL = EmbeddingModels.HF_BGE_LARGE_EN


class StoreBundle(TypedDict):
    """Bundle of store instances for read-only operations."""

    question_store: SQLiteQuestionStore
    chapter_store: SQLiteChapterStore


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("'\"")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


# Valid configuration keys for validation
VALID_ROOT_KEYS = {
    # Provider config
    "provider",
    "llm_model",
    "embedding_model",
    "llm_api_base",
    "embedding_api_base",
    "data_dir",
    # Custom provider
    "llm_client",
    "embedding_client",
    "llm_client_kwargs",
    "embedding_client_kwargs",
    # Settings section
    "settings",
}

# YAML key -> Settings field
SETTINGS_KEYS = {
    "top_k": "top_k",
    "embedding_dimension": "embedding_dimension",
    "max_context_chars": "max_context_chars",
    "answer_prompt": "answer_prompt",
    "synthesis_temperature": "synthesis_temperature",
    "temperature": "synthesis_temperature",  # alias
    "max_answer_tokens": "max_answer_tokens",
    "request_timeout": "request_timeout",
    "num_retries": "num_retries",
    "run_lease_seconds": "run_lease_seconds",
    "embed_batch_size": "embed_batch_size",
}

VALID_SETTINGS_KEYS = set(SETTINGS_KEYS)


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")
    return config


def _safe_int(value: str | None) -> int | None:
    """Parse int from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _safe_float(value: str | None) -> float | None:
    """Parse float from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from CHAPTERWISE_* environment variables.

    Returns values that were explicitly set (not defaults), to allow proper
    precedence: YAML settings are used unless overridden by env vars.

    Returns:
        Dictionary of setting name -> value for explicitly set env vars
    """
    result: dict[str, Any] = {}

    for name in ("top_k", "embedding_dimension", "max_context_chars", "max_answer_tokens"):
        if (val := _safe_int(os.environ.get(f"CHAPTERWISE_{name.upper()}"))) is not None:
            result[name] = val
    if (val := _safe_int(os.environ.get("CHAPTERWISE_NUM_RETRIES"))) is not None:
        result["num_retries"] = val
    if (val := _safe_int(os.environ.get("CHAPTERWISE_EMBED_BATCH_SIZE"))) is not None:
        result["embed_batch_size"] = val
    if (fval := _safe_float(os.environ.get("CHAPTERWISE_SYNTHESIS_TEMPERATURE"))) is not None:
        result["synthesis_temperature"] = fval
    if (fval := _safe_float(os.environ.get("CHAPTERWISE_REQUEST_TIMEOUT"))) is not None:
        result["request_timeout"] = fval
    if (fval := _safe_float(os.environ.get("CHAPTERWISE_RUN_LEASE_SECONDS"))) is not None:
        result["run_lease_seconds"] = fval
    if "CHAPTERWISE_ANSWER_PROMPT" in os.environ:
        result["answer_prompt"] = os.environ["CHAPTERWISE_ANSWER_PROMPT"] or None

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract settings from the 'settings:' section of a YAML config.

    Args:
        config: The loaded YAML configuration

    Returns:
        Dictionary of setting name -> value
    """
    result: dict[str, Any] = {}
    yaml_settings = config.get("settings", {}) or {}

    for yaml_key, settings_key in SETTINGS_KEYS.items():
        if yaml_key in yaml_settings:
            result[settings_key] = yaml_settings[yaml_key]

    return result


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables (for CI/CD override)
    2. YAML settings: section
    3. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance

    Raises:
        pydantic.ValidationError: If a merged value is out of range.
    """
    from chapterwise.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    # Env vars override YAML, which overrides defaults
    merged = {**yaml_settings, **env_settings}
    return Settings(**merged)


def resolve_data_dir(data_dir: str | None, config: dict[str, Any]) -> str:
    """Pick the data directory: argument, then CHAPTERWISE_DATA_DIR, then YAML, then default."""
    return str(
        data_dir
        or os.environ.get("CHAPTERWISE_DATA_DIR")
        or config.get("data_dir")
        or DEFAULT_DATA_DIR
    )


def get_stores(data_dir: str | Path) -> StoreBundle:
    """Get store instances for operations that need no provider (list, status).

    Args:
        data_dir: Path to data directory

    Returns:
        Bundle of store instances
    """
    from chapterwise.stores import SQLiteChapterStore, SQLiteQuestionStore

    Path(data_dir).mkdir(parents=True, exist_ok=True)
    data_dir = str(data_dir)
    return {
        "question_store": SQLiteQuestionStore(os.path.join(data_dir, "questions.db")),
        "chapter_store": SQLiteChapterStore(os.path.join(data_dir, "chapters.db")),
    }


def import_class(class_path: str) -> type[Any]:
    """Import a class from a dotted path like 'my_package.module.ClassName'."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return cast(type[Any], getattr(module, class_name))


@dataclass
class AppConfig:
    """Configuration for creating a Chapterwise instance."""

    provider: str
    llm_model: str | None
    embedding_model: str | None
    data_dir: str
    settings: Settings
    llm_api_key: str | None = None
    embedding_api_key: str | None = None
    llm_api_base: str | None = None
    embedding_api_base: str | None = None
    # Custom provider fields
    llm_client_class: str | None = None
    embedding_client_class: str | None = None
    llm_client_kwargs: dict[str, Any] | None = None
    embedding_client_kwargs: dict[str, Any] | None = None


def get_app_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> AppConfig | ConfigError:
    """Get configuration for creating a Chapterwise instance.

    This extracts configuration without creating the instance, allowing
    the caller to handle errors and missing values appropriately.

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        AppConfig with all settings, or ConfigError if invalid
    """
    try:
        config = load_config(config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        return ConfigError(
            message=f"Could not read config file: {e}",
            suggestion="Check the YAML syntax of chapterwise.yaml",
        )

    effective_data_dir = resolve_data_dir(data_dir, config)
    provider = config.get("provider", "litellm")

    try:
        settings = build_settings(config, get_settings_from_env())
    except ValidationError as e:
        return ConfigError(
            message=f"Invalid settings: {e}",
            suggestion="Fix the values in the 'settings:' section or CHAPTERWISE_* variables",
        )

    if provider == "litellm":
        llm_model = (
            os.environ.get("CHAPTERWISE_LLM_MODEL") or config.get("llm_model") or DEFAULT_LLM_MODEL
        )
        embedding_model = (
            os.environ.get("CHAPTERWISE_EMBEDDING_MODEL")
            or config.get("embedding_model")
            or DEFAULT_EMBEDDING_MODEL
        )

        return AppConfig(
            provider=provider,
            llm_model=llm_model,
            embedding_model=embedding_model,
            data_dir=effective_data_dir,
            settings=settings,
            llm_api_key=os.environ.get("CHAPTERWISE_LLM_API_KEY"),
            embedding_api_key=os.environ.get("CHAPTERWISE_EMBEDDING_API_KEY"),
            llm_api_base=config.get("llm_api_base"),
            embedding_api_base=config.get("embedding_api_base"),
        )

    elif provider == "custom":
        llm_client_class = config.get("llm_client")
        embedding_client_class = config.get("embedding_client")

        if not llm_client_class or not embedding_client_class:
            return ConfigError(
                message="Custom provider requires llm_client and embedding_client.",
                suggestion="Add these to chapterwise.yaml as dotted class paths",
            )

        return AppConfig(
            provider=provider,
            llm_model=None,
            embedding_model=None,
            data_dir=effective_data_dir,
            settings=settings,
            llm_client_class=llm_client_class,
            embedding_client_class=embedding_client_class,
            llm_client_kwargs=config.get("llm_client_kwargs", {}),
            embedding_client_kwargs=config.get("embedding_client_kwargs", {}),
        )

    else:
        return ConfigError(
            message=f"Unknown provider '{provider}'",
            suggestion="Supported providers: litellm, custom",
        )


def create_chapterwise(config: AppConfig) -> Chapterwise:
    """Create a Chapterwise instance from configuration.

    Raises:
        ImportError: If custom provider classes cannot be imported
    """
    from chapterwise.chapterwise import Chapterwise
    from chapterwise.configuration import LiteLLMProvider, LocalStorage

    if config.provider == "litellm":
        if not config.llm_model or not config.embedding_model:
            raise ValueError("LiteLLM provider requires llm_model and embedding_model")

        return Chapterwise(
            provider=LiteLLMProvider(
                llm=config.llm_model,
                embedding=config.embedding_model,
                llm_api_key=config.llm_api_key,
                embedding_api_key=config.embedding_api_key,
                llm_api_base=config.llm_api_base,
                embedding_api_base=config.embedding_api_base,
            ),
            storage=LocalStorage(config.data_dir),
            settings=config.settings,
        )

    elif config.provider == "custom":
        from dataclasses import dataclass as dc

        from chapterwise.embedder import ClientEmbedder

        if not config.llm_client_class or not config.embedding_client_class:
            raise ValueError("Custom provider requires all class paths")

        llm_client = import_class(config.llm_client_class)(**(config.llm_client_kwargs or {}))
        embedding_client = import_class(config.embedding_client_class)(
            **(config.embedding_client_kwargs or {})
        )

        @dc(frozen=True)
        class _CustomProvider:
            """Inline provider for custom client implementations."""

            _llm_client: Any
            _embedding_client: Any

            def build_embedder(self, settings: Settings) -> Any:
                return ClientEmbedder(embedding_client=self._embedding_client)

            def build_llm_client(self, settings: Settings) -> Any:
                return self._llm_client

        return Chapterwise(
            provider=_CustomProvider(_llm_client=llm_client, _embedding_client=embedding_client),
            storage=LocalStorage(config.data_dir),
            settings=config.settings,
        )

    else:
        raise ValueError(f"Unknown provider: {config.provider}")
