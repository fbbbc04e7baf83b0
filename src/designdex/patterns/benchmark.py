"""Timing comparison of linear search against the indexed fast path."""

from __future__ import annotations

import time

from pydantic import BaseModel

from designdex.patterns.cache import PatternCache
from designdex.patterns.categories import Category, Framework
from designdex.patterns.search import SearchOptions, search_patterns

DEFAULT_QUERIES: list[SearchOptions] = [
    SearchOptions(tags=["grid"]),
    SearchOptions(tags=["hover", "animation"]),
    SearchOptions(category=Category.FORMS),
    SearchOptions(framework=Framework.REACT),
    SearchOptions(category=Category.LAYOUT, framework=Framework.VUE),
    SearchOptions(tags=["responsive"], category=Category.NAVIGATION),
]


class QueryTiming(BaseModel):
    query: dict
    linear_ms: float
    linear_count: int
    indexed_ms: float
    indexed_count: int

    @property
    def speedup(self) -> float | None:
        if self.indexed_ms <= 0:
            return None
        return self.linear_ms / self.indexed_ms


class BenchmarkReport(BaseModel):
    index_build_ms: float
    pattern_count: int
    timings: list[QueryTiming]


async def run_benchmark(
    cache: PatternCache,
    queries: list[SearchOptions] | None = None,
) -> BenchmarkReport:
    """Rebuild the index from scratch, then time each query both ways."""
    cache.invalidate()
    start = time.perf_counter()
    index = await cache.get_index()
    build_ms = (time.perf_counter() - start) * 1000

    timings: list[QueryTiming] = []
    for options in queries if queries is not None else DEFAULT_QUERIES:
        start = time.perf_counter()
        linear = await search_patterns(cache.store, options)
        linear_ms = (time.perf_counter() - start) * 1000

        start = time.perf_counter()
        ids = await cache.search_fast(options)
        indexed_ms = (time.perf_counter() - start) * 1000

        timings.append(
            QueryTiming(
                query=_describe(options),
                linear_ms=linear_ms,
                linear_count=len(linear),
                indexed_ms=indexed_ms,
                indexed_count=len(ids),
            )
        )

    return BenchmarkReport(
        index_build_ms=build_ms,
        pattern_count=len(index.by_id),
        timings=timings,
    )


def _describe(options: SearchOptions) -> dict:
    query: dict = {}
    if options.tags:
        query["tags"] = list(options.tags)
    if options.category is not None:
        query["category"] = str(options.category)
    if options.framework is not None:
        query["framework"] = str(options.framework)
    return query
