"""Config command - display current configuration.

This module provides the config display logic that the CLI uses.
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from chapterwise.commands.base import ConfigResult, SettingInfo
from chapterwise.config import (
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_LLM_MODEL,
    build_settings,
    find_config_file,
    get_settings_from_env,
    get_settings_from_yaml,
    load_config,
    resolve_data_dir,
    validate_config,
)


def _get_setting_source(
    key: str,
    yaml_settings: dict,
    env_settings: dict,
) -> str:
    """Determine the source of a setting value."""
    if key in env_settings:
        return "env var"
    if key in yaml_settings:
        return "yaml"
    return "default"


def _display(value: object) -> str:
    return "not set" if value is None else str(value)


def config(
    config_path: str | Path | None = None,
) -> ConfigResult:
    """Get current configuration settings.

    Args:
        config_path: Override config file path

    Returns:
        ConfigResult with all settings and their sources
    """
    found_config_path = Path(config_path) if config_path is not None else find_config_file()
    try:
        cli_config = load_config(found_config_path)
    except (OSError, ValueError, yaml.YAMLError) as e:
        return ConfigResult(success=False, error=f"Could not read config file: {e}")

    env_settings = get_settings_from_env()
    yaml_settings = get_settings_from_yaml(cli_config)

    try:
        settings = build_settings(cli_config, env_settings)
    except ValidationError as e:
        return ConfigResult(success=False, error=f"Invalid settings: {e}")

    result = ConfigResult(success=True)
    result.config_path = str(found_config_path) if found_config_path else None
    result.warnings = validate_config(cli_config, found_config_path)
    result.provider = cli_config.get("provider", "litellm")

    if result.provider == "litellm":
        result.llm_model = (
            os.environ.get("CHAPTERWISE_LLM_MODEL")
            or cli_config.get("llm_model")
            or DEFAULT_LLM_MODEL
        )
        result.embedding_model = (
            os.environ.get("CHAPTERWISE_EMBEDDING_MODEL")
            or cli_config.get("embedding_model")
            or DEFAULT_EMBEDDING_MODEL
        )

    result.data_dir = resolve_data_dir(None, cli_config)

    for key in (
        "top_k",
        "max_context_chars",
        "embedding_dimension",
        "synthesis_temperature",
        "max_answer_tokens",
        "request_timeout",
        "num_retries",
        "run_lease_seconds",
        "embed_batch_size",
    ):
        result.settings.append(
            SettingInfo(
                name=key,
                value=_display(getattr(settings, key)),
                source=_get_setting_source(key, yaml_settings, env_settings),
            )
        )

    result.settings.append(
        SettingInfo(
            name="answer_prompt",
            value="custom" if settings.answer_prompt else "built-in",
            source=_get_setting_source("answer_prompt", yaml_settings, env_settings),
        )
    )

    return result
