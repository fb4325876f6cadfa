"""Tests for Structify configuration."""
from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from structify.config import (
    DEFAULT_MODEL,
    StructifyConfig,
    get_config,
    init,
    load_config,
    reset_config,
)
from structify.core.exceptions import ConfigError


class TestInit:
    """Tests for explicit initialization."""

    def test_init_merges_defaults(self) -> None:
        cfg = init({"openrouter_api_key": "k", "max_retries": 5})
        assert cfg.max_retries == 5
        assert cfg.default_model == DEFAULT_MODEL
        assert cfg.max_input_size == 50_000
        assert cfg.max_schema_depth == 5
        assert cfg.max_field_count == 100
        assert cfg.timeout_s == 30.0
        assert get_config() is cfg

    def test_init_accepts_config_instance(self) -> None:
        cfg = StructifyConfig(openrouter_api_key="k", default_model="openai/gpt-4o-mini")
        assert init(cfg) is cfg
        assert get_config().default_model == "openai/gpt-4o-mini"

    def test_init_requires_api_key(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            init({"default_model": "x"})
        assert "API key" in exc_info.value.message

    def test_config_is_immutable(self) -> None:
        cfg = StructifyConfig(openrouter_api_key="k")
        with pytest.raises(ValidationError):
            cfg.max_retries = 10  # type: ignore[misc]

    def test_api_key_not_in_repr(self) -> None:
        cfg = StructifyConfig(openrouter_api_key="secret-key")
        assert "secret-key" not in repr(cfg)


class TestGetConfig:
    """Tests for lazy initialization from the environment."""

    def test_get_config_without_key_raises(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            get_config()
        assert "hint" in exc_info.value.details

    def test_get_config_auto_inits_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        cfg = get_config()
        assert cfg.openrouter_api_key == "env-key"
        assert cfg.default_model == DEFAULT_MODEL

    def test_get_config_reads_model_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        monkeypatch.setenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")
        assert get_config().default_model == "openai/gpt-4o-mini"

    def test_reset_config_clears_state(self) -> None:
        init({"openrouter_api_key": "k"})
        reset_config()
        with pytest.raises(ConfigError):
            get_config()


class TestLoadConfig:
    """Tests for YAML config loading."""

    def test_load_config(self, tmp_path: Path) -> None:
        path = tmp_path / "structify.yaml"
        path.write_text(
            yaml.dump({"openrouter_api_key": "file-key", "timeout_s": 10, "max_retries": 2})
        )
        cfg = load_config(path)
        assert cfg.openrouter_api_key == "file-key"
        assert cfg.timeout_s == 10.0
        assert cfg.max_retries == 2

    def test_load_config_key_from_env(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("OPENROUTER_API_KEY", "env-key")
        path = tmp_path / "structify.yaml"
        path.write_text(yaml.dump({"max_field_count": 20}))
        cfg = load_config(path)
        assert cfg.openrouter_api_key == "env-key"
        assert cfg.max_field_count == 20

    def test_load_config_without_key_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "structify.yaml"
        path.write_text("")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_load_config_missing_file(self) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(Path("nonexistent.yaml"))
