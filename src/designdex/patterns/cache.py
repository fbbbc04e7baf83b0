"""PatternCache: in-memory multi-key index over the store with single-flight builds."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field

from designdex.patterns.categories import Category, Framework
from designdex.patterns.errors import PatternError
from designdex.patterns.models import PatternMetadata
from designdex.patterns.search import SearchOptions
from designdex.patterns.storage import PatternStore

logger = logging.getLogger(__name__)


@dataclass
class PatternIndex:
    by_id: dict[str, PatternMetadata] = field(default_factory=dict)
    by_tag: dict[str, set[str]] = field(default_factory=dict)  # lowercase tag -> ids
    by_category: dict[Category, set[str]] = field(default_factory=dict)
    by_framework: dict[Framework, set[str]] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)
    build_time_ms: float = 0.0

    def add(self, meta: PatternMetadata) -> None:
        self.by_id[meta.id] = meta
        for tag in meta.tags:
            self.by_tag.setdefault(tag.lower(), set()).add(meta.id)
        self.by_category.setdefault(meta.category, set()).add(meta.id)
        for framework in meta.frameworks:
            self.by_framework.setdefault(framework, set()).add(meta.id)

    def stats(self) -> dict:
        return {
            "patterns": len(self.by_id),
            "tags": len(self.by_tag),
            "categories": {str(c): len(ids) for c, ids in sorted(self.by_category.items())},
            "frameworks": {str(f): len(ids) for f, ids in sorted(self.by_framework.items())},
            "skipped": list(self.skipped),
            "build_time_ms": round(self.build_time_ms, 3),
        }


class PatternCache:
    """Owns the published index for one store.

    States: empty -> building -> ready; invalidate() returns to empty.
    Concurrent get_index() calls during a build all await the same task.
    """

    def __init__(self, store: PatternStore) -> None:
        self._store = store
        self._index: PatternIndex | None = None
        self._pending: asyncio.Task[PatternIndex] | None = None
        self._generation = 0
        self.build_count = 0

    @property
    def store(self) -> PatternStore:
        return self._store

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    @property
    def is_building(self) -> bool:
        return self._pending is not None

    async def build(self) -> PatternIndex:
        """Build a fresh index from the store. Does not publish it."""
        start = time.perf_counter()
        ids = await self._store.list_patterns()
        loaded = await asyncio.gather(*(self._load_metadata(i) for i in ids))

        index = PatternIndex()
        for pattern_id, meta in zip(ids, loaded, strict=True):
            if meta is None:
                index.skipped.append(pattern_id)
            else:
                index.add(meta)
        index.build_time_ms = (time.perf_counter() - start) * 1000
        self.build_count += 1
        logger.info(
            "Built pattern index: %d patterns, %d skipped in %.1fms",
            len(index.by_id),
            len(index.skipped),
            index.build_time_ms,
        )
        return index

    async def get_index(self) -> PatternIndex:
        """Return the published index, building it on first access."""
        if self._index is not None:
            return self._index
        if self._pending is None:
            self._pending = asyncio.create_task(self._build_and_publish(self._generation))
        # shield: one cancelled waiter must not cancel the shared build
        return await asyncio.shield(self._pending)

    def invalidate(self) -> None:
        """Drop the published index and forget any in-flight build."""
        self._generation += 1
        self._index = None
        self._pending = None
        logger.debug("Pattern index invalidated")

    async def search_fast(self, options: SearchOptions) -> list[str]:
        """Indexed AND-search returning sorted ids."""
        index = await self.get_index()

        result: set[str] | None = None
        filters: list[set[str]] = [index.by_tag.get(t.lower(), set()) for t in options.tags]
        if options.category is not None:
            filters.append(index.by_category.get(options.category, set()))
        if options.framework is not None:
            filters.append(index.by_framework.get(options.framework, set()))

        for ids in filters:
            result = set(ids) if result is None else result & ids
            if not result:
                return []

        if result is None:
            return list(index.by_id)
        return sorted(result)

    async def get_metadata(self, pattern_id: str) -> PatternMetadata | None:
        index = await self.get_index()
        return index.by_id.get(pattern_id)

    async def _build_and_publish(self, generation: int) -> PatternIndex:
        try:
            index = await self.build()
        except BaseException:
            if generation == self._generation:
                self._pending = None
            raise
        if generation == self._generation:
            self._index = index
            self._pending = None
        return index

    async def _load_metadata(self, pattern_id: str) -> PatternMetadata | None:
        try:
            record = await self._store.load_pattern(pattern_id)
        except (PatternError, OSError) as e:
            logger.warning("Skipping pattern %s during index build: %s", pattern_id, e)
            return None
        return PatternMetadata.from_record(pattern_id, record)
