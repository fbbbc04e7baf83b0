"""Configuration for the suggestion engine."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LIMIT = 5
DEFAULT_MIN_RELEVANCE = 0.3


@dataclass
class SuggestionsConfig:
    limit: int = DEFAULT_LIMIT
    min_relevance: float = DEFAULT_MIN_RELEVANCE


def apply_suggestions_section(config: SuggestionsConfig, data: dict[str, object]) -> None:
    limit = data.get("limit")
    if isinstance(limit, int) and not isinstance(limit, bool) and limit > 0:
        config.limit = limit
    min_relevance = data.get("min_relevance")
    if isinstance(min_relevance, int | float) and not isinstance(min_relevance, bool):
        if 0.0 <= min_relevance <= 1.0:
            config.min_relevance = float(min_relevance)
