"""Suggestion engine: rank indexed patterns against a task context."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field

from designdex.integration.config import SuggestionsConfig
from designdex.integration.context import TaskContext, analyze_task_context
from designdex.patterns.cache import PatternCache
from designdex.patterns.categories import Category, Framework
from designdex.patterns.models import PatternRecord

CATEGORY_WEIGHT = 0.5
KEYWORD_WEIGHT = 0.15
FRAMEWORK_WEIGHT = 0.1


class PatternSuggestion(BaseModel):
    id: str
    pattern: PatternRecord
    relevance: float = Field(ge=0.0, le=1.0)
    reason: str
    matched_keywords: list[str] = Field(default_factory=list)


@dataclass
class SuggestOptions:
    text: str | None = None
    categories: list[Category] | None = None
    framework: Framework | None = None
    limit: int | None = None
    min_relevance: float | None = None


def resolve_context(options: SuggestOptions) -> TaskContext:
    """Text analysis first; explicit categories override the detected ones."""
    if options.text:
        context = analyze_task_context(options.text, options.framework)
    else:
        context = TaskContext(text="", framework=options.framework)
    if options.categories is not None:
        context.categories = list(dict.fromkeys(options.categories))
    return context


def calculate_relevance(record: PatternRecord, context: TaskContext) -> tuple[float, list[str]]:
    score = 0.0
    matched: list[str] = []

    if record.category in context.categories:
        score += CATEGORY_WEIGHT

    tags = {t.lower() for t in record.tags}
    for keyword in context.keywords:
        if keyword in tags:
            score += KEYWORD_WEIGHT
            matched.append(keyword)

    if context.framework is not None and context.framework in record.frameworks:
        score += FRAMEWORK_WEIGHT

    return round(min(score, 1.0), 4), matched


def describe_match(record: PatternRecord, context: TaskContext, matched: list[str]) -> str:
    parts: list[str] = []
    if record.category in context.categories:
        parts.append(f"matches {record.category} category")
    if matched:
        parts.append(f"tags match: {', '.join(matched)}")
    if context.framework is not None and context.framework in record.frameworks:
        parts.append(f"supports framework {context.framework}")
    return "; ".join(parts) if parts else "general match"


class SuggestionEngine:
    def __init__(self, cache: PatternCache, config: SuggestionsConfig | None = None) -> None:
        self._cache = cache
        self._config = config or SuggestionsConfig()

    async def suggest(self, options: SuggestOptions) -> list[PatternSuggestion]:
        """Top-N suggestions at or above the relevance floor, best first.

        Returns [] when neither text nor explicit categories resolve to a category.
        Ties keep candidate order: resolved category order, then id order.
        """
        limit = options.limit if options.limit is not None else self._config.limit
        min_relevance = (
            options.min_relevance
            if options.min_relevance is not None
            else self._config.min_relevance
        )

        context = resolve_context(options)
        if not context.categories:
            return []

        index = await self._cache.get_index()

        candidates: dict[str, None] = {}
        for category in context.categories:
            for pattern_id in sorted(index.by_category.get(category, ())):
                candidates[pattern_id] = None

        suggestions: list[PatternSuggestion] = []
        for pattern_id in candidates:
            meta = index.by_id.get(pattern_id)
            if meta is None:
                continue
            if context.framework is not None and context.framework not in meta.frameworks:
                continue

            record = await self._cache.store.load_pattern(pattern_id)
            score, matched = calculate_relevance(record, context)
            if score < min_relevance:
                continue
            suggestions.append(
                PatternSuggestion(
                    id=pattern_id,
                    pattern=record,
                    relevance=score,
                    reason=describe_match(record, context, matched),
                    matched_keywords=matched,
                )
            )

        suggestions.sort(key=lambda s: s.relevance, reverse=True)
        return suggestions[: max(limit, 0)]
