"""Starlette app factory with lifespan for the pattern store and index."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from starlette.applications import Starlette

from designdex.config import Config
from designdex.integration.suggestions import SuggestionEngine
from designdex.patterns.cache import PatternCache
from designdex.patterns.storage import PatternStore
from designdex.server.routes_patterns import routes as pattern_routes
from designdex.server.routes_system import routes as system_routes

logger = logging.getLogger(__name__)


def create_app(
    config: Config | None = None,
    patterns_dir: Path | None = None,
) -> Starlette:
    """Create a Starlette app serving the store rooted at patterns_dir."""
    config = config or Config()
    root = patterns_dir or config.patterns_path

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncGenerator[None, None]:
        store = PatternStore(root)
        app.state.config = config
        app.state.store = store
        app.state.cache = PatternCache(store)
        app.state.suggestions = SuggestionEngine(app.state.cache, config.suggestions)
        logger.info("Serving patterns from %s", root)

        yield

        app.state.cache.invalidate()

    return Starlette(routes=system_routes + pattern_routes, lifespan=lifespan)
