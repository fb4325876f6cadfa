"""Configuration for Structify.

A :class:`StructifyConfig` is an immutable value passed to every
:class:`~structify.extractor.ExtractionPipeline`. The module-level
``init`` / ``get_config`` / ``reset_config`` functions hold the single
process-wide instance used by the :func:`structify.extract` shortcut.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field

from structify.core.exceptions import ConfigError

logger = structlog.get_logger(__name__)

API_KEY_ENV = "OPENROUTER_API_KEY"
MODEL_ENV = "OPENROUTER_MODEL"

DEFAULT_MODEL = "nvidia/nemotron-nano-12b-v2-vl:free"


class StructifyConfig(BaseModel):
    """Root configuration.

    Attributes:
        openrouter_api_key: OpenRouter API key (required).
        default_model: Model used when a call does not override it.
        max_input_size: Maximum input text length in characters.
        max_schema_depth: Maximum nesting depth of a schema.
        max_field_count: Maximum number of keys per schema level.
        timeout_s: Per-request timeout in seconds.
        max_retries: Total attempts per extraction call.
    """

    openrouter_api_key: str = Field(min_length=1, repr=False)
    default_model: str = DEFAULT_MODEL
    max_input_size: int = Field(default=50_000, gt=0)
    max_schema_depth: int = Field(default=5, ge=0)
    max_field_count: int = Field(default=100, gt=0)
    timeout_s: float = Field(default=30.0, gt=0)
    max_retries: int = Field(default=3, ge=1)

    model_config = {"frozen": True}


_config: StructifyConfig | None = None


def _build(data: dict[str, Any]) -> StructifyConfig:
    if not data.get("openrouter_api_key"):
        raise ConfigError(
            "OpenRouter API key is required. Provide it via "
            f"openrouter_api_key or the {API_KEY_ENV} environment variable.",
            details={"receivedKeys": sorted(data)},
        )
    return StructifyConfig(**data)


def init(config: StructifyConfig | dict[str, Any]) -> StructifyConfig:
    """Install the process-wide configuration.

    Args:
        config: A ready config, or a mapping merged over the defaults.

    Returns:
        The installed configuration.

    Raises:
        ConfigError: If no API key is given.
    """
    global _config  # noqa: PLW0603
    if isinstance(config, dict):
        config = _build(config)
    _config = config
    logger.info("config_initialized", default_model=config.default_model)
    return config


def get_config() -> StructifyConfig:
    """Return the process-wide configuration.

    Auto-initializes from ``OPENROUTER_API_KEY`` (and optionally
    ``OPENROUTER_MODEL``) when :func:`init` was never called.

    Raises:
        ConfigError: If neither path yields an API key.
    """
    if _config is not None:
        return _config

    api_key = os.environ.get(API_KEY_ENV)
    if not api_key:
        raise ConfigError(
            "Structify is not initialized. Call init() with your configuration "
            f"or set the {API_KEY_ENV} environment variable.",
            details={"hint": 'init({"openrouter_api_key": "your-key"})'},
        )

    data: dict[str, Any] = {"openrouter_api_key": api_key}
    model = os.environ.get(MODEL_ENV)
    if model:
        data["default_model"] = model
    return init(data)


def reset_config() -> None:
    """Clear the process-wide configuration. Test isolation only."""
    global _config  # noqa: PLW0603
    _config = None


def load_config(path: Path) -> StructifyConfig:
    """Load configuration from a YAML file.

    The API key may be omitted from the file; it is then read from
    ``OPENROUTER_API_KEY``.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        StructifyConfig built from the file over the defaults.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigError: If no API key is available.
    """
    if not path.exists():
        msg = f"Config file not found: {path}"
        raise FileNotFoundError(msg)

    with open(path) as f:  # noqa: PTH123
        data: dict[str, Any] = yaml.safe_load(f) or {}

    if not data.get("openrouter_api_key") and os.environ.get(API_KEY_ENV):
        data["openrouter_api_key"] = os.environ[API_KEY_ENV]
    return _build(data)
