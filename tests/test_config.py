"""Tests for config loading and constants."""

import json
import logging
from pathlib import Path

import pytest

from designdex.config import (
    CONFIG_FILENAME,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PATTERNS_DIR,
    DEFAULT_PORT,
    Config,
    configure_logging,
    get_data_dir,
    load_config,
)
from designdex.integration.config import SuggestionsConfig, apply_suggestions_section


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "DESIGNDEX_PORT",
        "DESIGNDEX_PATTERNS_DIR",
        "DESIGNDEX_LOG_LEVEL",
        "DESIGNDEX_DATA_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


class TestConstants:
    def test_default_port(self):
        assert DEFAULT_PORT == 41888

    def test_default_patterns_dir(self):
        assert DEFAULT_PATTERNS_DIR == ".knowledge/patterns"

    def test_config_filename(self):
        assert CONFIG_FILENAME == ".designdex.json"


class TestGetDataDir:
    def test_default_path(self):
        assert get_data_dir() == Path.home() / ".designdex" / "data"

    def test_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DESIGNDEX_DATA_DIR", str(tmp_path))
        assert get_data_dir() == tmp_path


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path):
        config = load_config(tmp_path / "missing.json")
        assert config == Config()
        assert config.log_level == DEFAULT_LOG_LEVEL
        assert config.suggestions == SuggestionsConfig(limit=5, min_relevance=0.3)

    def test_none_path(self):
        assert load_config(None).port == DEFAULT_PORT

    def test_reads_file(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(
            json.dumps(
                {
                    "port": 5000,
                    "patterns_dir": "kb/patterns",
                    "log_level": "debug",
                    "suggestions": {"limit": 3, "min_relevance": 0.5},
                }
            )
        )
        config = load_config(path)
        assert config.port == 5000
        assert config.patterns_path == Path("kb/patterns")
        assert config.log_level == "DEBUG"
        assert config.suggestions.limit == 3
        assert config.suggestions.min_relevance == 0.5

    def test_invalid_json_uses_defaults(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("{broken")
        assert load_config(path) == Config()

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text("  \n")
        assert load_config(path) == Config()

    def test_wrong_types_ignored(self, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(json.dumps({"port": "5000", "suggestions": "many"}))
        config = load_config(path)
        assert config.port == DEFAULT_PORT
        assert config.suggestions == SuggestionsConfig()

    def test_env_overrides_file(self, monkeypatch, tmp_path):
        path = tmp_path / CONFIG_FILENAME
        path.write_text(json.dumps({"port": 5000, "patterns_dir": "from-file"}))
        monkeypatch.setenv("DESIGNDEX_PORT", "6000")
        monkeypatch.setenv("DESIGNDEX_PATTERNS_DIR", "/srv/patterns")
        monkeypatch.setenv("DESIGNDEX_LOG_LEVEL", "info")
        config = load_config(path)
        assert config.port == 6000
        assert config.patterns_dir == "/srv/patterns"
        assert config.log_level == "INFO"

    def test_non_numeric_port_env_ignored(self, monkeypatch):
        monkeypatch.setenv("DESIGNDEX_PORT", "abc")
        assert load_config(None).port == DEFAULT_PORT


class TestSuggestionsSection:
    def test_out_of_range_values_ignored(self):
        config = SuggestionsConfig()
        apply_suggestions_section(config, {"limit": 0, "min_relevance": 1.5})
        assert config == SuggestionsConfig()

    def test_bool_is_not_a_number(self):
        config = SuggestionsConfig()
        apply_suggestions_section(config, {"limit": True, "min_relevance": False})
        assert config == SuggestionsConfig()

    def test_integer_relevance_accepted(self):
        config = SuggestionsConfig()
        apply_suggestions_section(config, {"min_relevance": 1})
        assert config.min_relevance == 1.0


class TestConfigureLogging:
    def test_sets_root_level(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging("debug")
        assert calls[0]["level"] == logging.DEBUG

    def test_unknown_level_falls_back_to_warning(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        configure_logging("chatty")
        assert calls[0]["level"] == logging.WARNING
