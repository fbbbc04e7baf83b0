"""Shared fixtures for designdex tests."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from pattern_factory import SEED_PATTERNS

from designdex.patterns.cache import PatternCache
from designdex.patterns.storage import PatternStore


@pytest.fixture
def patterns_root(tmp_path: Path) -> Path:
    return tmp_path / "patterns"


@pytest.fixture
def store(patterns_root: Path) -> PatternStore:
    return PatternStore(patterns_root)


@pytest.fixture
def cache(store: PatternStore) -> PatternCache:
    return PatternCache(store)


@pytest_asyncio.fixture
async def seeded_store(store: PatternStore) -> PatternStore:
    """Store with five patterns across three categories."""
    for doc in SEED_PATTERNS:
        await store.save_pattern(doc)
    return store
