"""Linear search over the store. Loads every candidate; the reference behavior for the index."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from designdex.patterns.categories import Category, Framework
from designdex.patterns.models import PatternRecord, StoredPattern
from designdex.patterns.storage import PatternStore


@dataclass
class SearchOptions:
    tags: list[str] = field(default_factory=list)
    category: Category | None = None
    framework: Framework | None = None

    def is_empty(self) -> bool:
        return not self.tags and self.category is None and self.framework is None


def has_all_tags(record: PatternRecord, tags: list[str]) -> bool:
    """Case-insensitive exact match of every requested tag."""
    own = {t.lower() for t in record.tags}
    return all(tag.lower() in own for tag in tags)


async def search_by_tags(store: PatternStore, tags: list[str]) -> list[StoredPattern]:
    patterns = await _load_all(store, await store.list_patterns())
    return [p for p in patterns if has_all_tags(p.record, tags)]


async def filter_by_category(store: PatternStore, category: Category) -> list[StoredPattern]:
    return await _load_all(store, await store.list_patterns(category))


async def filter_by_framework(store: PatternStore, framework: Framework) -> list[StoredPattern]:
    patterns = await _load_all(store, await store.list_patterns())
    return [p for p in patterns if framework in p.record.frameworks]


async def search_patterns(store: PatternStore, options: SearchOptions) -> list[StoredPattern]:
    """Combined search: tags AND category AND framework."""
    ids = await store.list_patterns(options.category)
    if not ids:
        return []

    patterns = await _load_all(store, ids)
    if options.tags:
        patterns = [p for p in patterns if has_all_tags(p.record, options.tags)]
    if options.framework is not None:
        patterns = [p for p in patterns if options.framework in p.record.frameworks]
    return patterns


async def _load_all(store: PatternStore, ids: list[str]) -> list[StoredPattern]:
    records = await asyncio.gather(*(store.load_pattern(i) for i in ids))
    return [StoredPattern(id=i, record=r) for i, r in zip(ids, records, strict=True)]
