"""Configuration defaults, config file loading, and environment overrides."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from designdex.integration.config import SuggestionsConfig, apply_suggestions_section

# Server defaults
DEFAULT_PORT = 41888
DEFAULT_PATTERNS_DIR = ".knowledge/patterns"
DEFAULT_LOG_LEVEL = "WARNING"
CONFIG_FILENAME = ".designdex.json"


def get_data_dir() -> Path:
    env = os.environ.get("DESIGNDEX_DATA_DIR")
    if env:
        return Path(env)
    return Path.home() / ".designdex" / "data"


@dataclass
class Config:
    port: int = DEFAULT_PORT
    patterns_dir: str = DEFAULT_PATTERNS_DIR
    log_level: str = DEFAULT_LOG_LEVEL
    suggestions: SuggestionsConfig = field(default_factory=SuggestionsConfig)

    @property
    def patterns_path(self) -> Path:
        return Path(self.patterns_dir)


def load_config(path: Path | None = None) -> Config:
    """Load config from JSON file with env var overrides."""
    config = Config()

    if path and path.exists():
        try:
            text = path.read_text()
            if text.strip():
                data = json.loads(text)
                _apply(config, data)
        except (json.JSONDecodeError, OSError):
            pass

    # Env var overrides
    port_env = os.environ.get("DESIGNDEX_PORT")
    if port_env and port_env.isdigit():
        config.port = int(port_env)

    patterns_env = os.environ.get("DESIGNDEX_PATTERNS_DIR")
    if patterns_env:
        config.patterns_dir = patterns_env

    level_env = os.environ.get("DESIGNDEX_LOG_LEVEL")
    if level_env:
        config.log_level = level_env.upper()

    return config


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _apply(config: Config, data: dict) -> None:
    if isinstance(data.get("port"), int):
        config.port = data["port"]
    if isinstance(data.get("patterns_dir"), str):
        config.patterns_dir = data["patterns_dir"]
    if isinstance(data.get("log_level"), str):
        config.log_level = data["log_level"].upper()
    section = data.get("suggestions", {})
    if isinstance(section, dict):
        apply_suggestions_section(config.suggestions, section)
