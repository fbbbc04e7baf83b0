"""System routes: health and version."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from designdex import __version__ as VERSION


async def health(request: Request) -> JSONResponse:
    """Liveness plus which store is served and whether its index is built."""
    cache = request.app.state.cache
    return JSONResponse(
        {
            "status": "ok",
            "patterns_dir": str(cache.store.root),
            "index_ready": cache.is_ready,
        }
    )


async def version(request: Request) -> JSONResponse:
    return JSONResponse({"name": "designdex", "version": VERSION})


routes = [
    Route("/health", health),
    Route("/api/version", version),
]
