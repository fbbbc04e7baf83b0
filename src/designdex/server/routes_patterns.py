"""Pattern routes: search, CRUD, suggestions, quality gate, code generation, index admin."""

from __future__ import annotations

import json
import math
from enum import StrEnum

from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from designdex.generator.code import generate_code
from designdex.integration.quality import validate_quality
from designdex.integration.suggestions import SuggestOptions
from designdex.patterns.categories import Category, Framework
from designdex.patterns.errors import NotFoundError, PatternError, ValidationError
from designdex.patterns.search import SearchOptions
from designdex.patterns.storage import PATTERN_EXTENSION
from designdex.patterns.validation import validate_pattern


class _BadRequest(Exception):
    pass


def _parse_enum(enum_cls: type[StrEnum], value: str | None, name: str) -> StrEnum | None:
    if value is None or value == "":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise _BadRequest(f"Invalid {name} '{value}' (expected one of: {allowed})") from None


def _split_csv(value: str | None) -> list[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def _validation_response(error: ValidationError) -> JSONResponse:
    return JSONResponse(
        {
            "error": str(error),
            "violations": [v.model_dump() for v in error.violations],
        },
        status_code=422,
    )


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400)


def _stale_index_response(request: Request, error: PatternError) -> JSONResponse:
    """An indexed id no longer loads: the store changed behind the index."""
    request.app.state.cache.invalidate()
    if isinstance(error, ValidationError):
        return _validation_response(error)
    return JSONResponse({"error": str(error)}, status_code=404)


async def _json_body(request: Request) -> object:
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise _BadRequest("Request body must be valid JSON") from None


def _pattern_id(request: Request) -> str:
    category = request.path_params["category"]
    slug = request.path_params["slug"]
    try:
        Category(category)
    except ValueError:
        raise NotFoundError(f"{category}/{slug}") from None
    return f"{category}/{slug}{PATTERN_EXTENSION}"


async def list_patterns(request: Request) -> JSONResponse:
    """GET /api/patterns — indexed search by tags, category, framework."""
    params = request.query_params
    try:
        options = SearchOptions(
            tags=_split_csv(params.get("tags")),
            category=_parse_enum(Category, params.get("category"), "category"),
            framework=_parse_enum(Framework, params.get("framework"), "framework"),
        )
    except _BadRequest as e:
        return _bad_request(str(e))

    cache = request.app.state.cache
    ids = await cache.search_fast(options)
    index = await cache.get_index()

    if params.get("full", "").lower() in ("1", "true", "yes"):
        store = request.app.state.store
        patterns = []
        for pattern_id in ids:
            try:
                record = await store.load_pattern(pattern_id)
            except PatternError as e:
                return _stale_index_response(request, e)
            patterns.append({"id": pattern_id, **record.to_document()})
    else:
        patterns = [index.by_id[i].model_dump(mode="json") for i in ids if i in index.by_id]

    return JSONResponse({"patterns": patterns, "count": len(patterns)})


async def get_pattern(request: Request) -> JSONResponse:
    """GET /api/patterns/{category}/{slug} — load one record."""
    store = request.app.state.store
    try:
        pattern_id = _pattern_id(request)
        record = await store.load_pattern(pattern_id)
    except NotFoundError as e:
        return JSONResponse({"error": str(e)}, status_code=404)
    except ValidationError as e:
        return _validation_response(e)
    return JSONResponse({"id": pattern_id, **record.to_document()})


async def save_pattern(request: Request) -> JSONResponse:
    """POST /api/patterns — validate and persist a record, then invalidate the index."""
    try:
        body = await _json_body(request)
    except _BadRequest as e:
        return _bad_request(str(e))

    store = request.app.state.store
    try:
        pattern_id = await store.save_pattern(body)
    except ValidationError as e:
        return _validation_response(e)
    request.app.state.cache.invalidate()
    return JSONResponse({"id": pattern_id}, status_code=201)


async def delete_pattern(request: Request) -> JSONResponse:
    """DELETE /api/patterns/{category}/{slug} — idempotent delete."""
    store = request.app.state.store
    try:
        pattern_id = _pattern_id(request)
    except NotFoundError:
        return JSONResponse({"deleted": False})
    removed = await store.delete_pattern(pattern_id)
    request.app.state.cache.invalidate()
    return JSONResponse({"id": pattern_id, "deleted": removed})


async def pattern_code(request: Request) -> Response:
    """GET /api/patterns/{category}/{slug}/code?framework= — generated starter code."""
    store = request.app.state.store
    try:
        pattern_id = _pattern_id(request)
        record = await store.load_pattern(pattern_id)
    except NotFoundError as e:
        return JSONResponse({"error": str(e)}, status_code=404)
    except ValidationError as e:
        return _validation_response(e)

    try:
        framework = _parse_enum(Framework, request.query_params.get("framework"), "framework")
    except _BadRequest as e:
        return _bad_request(str(e))
    return PlainTextResponse(generate_code(record, framework or record.frameworks[0]))


async def suggest_patterns(request: Request) -> JSONResponse:
    """POST /api/patterns/suggest — ranked suggestions for a task description."""
    try:
        body = await _json_body(request)
        if not isinstance(body, dict):
            raise _BadRequest("Request body must be a JSON object")
        options = SuggestOptions(
            text=_optional_text(body, "text"),
            categories=_optional_categories(body),
            framework=_parse_enum(Framework, _optional_text(body, "framework"), "framework"),
            limit=_optional_number(body, "limit", int),
            min_relevance=_optional_number(body, "min_relevance", float),
        )
    except _BadRequest as e:
        return _bad_request(str(e))

    engine = request.app.state.suggestions
    try:
        suggestions = await engine.suggest(options)
    except PatternError as e:
        return _stale_index_response(request, e)
    return JSONResponse(
        {
            "suggestions": [s.model_dump(mode="json", exclude_none=True) for s in suggestions],
            "count": len(suggestions),
        }
    )


async def check_quality(request: Request) -> JSONResponse:
    """POST /api/patterns/quality — run the quality gate on a record body."""
    try:
        body = await _json_body(request)
        record = validate_pattern(body)
    except _BadRequest as e:
        return _bad_request(str(e))
    except ValidationError as e:
        return _validation_response(e)
    return JSONResponse(validate_quality(record).model_dump(mode="json"))


async def index_stats(request: Request) -> JSONResponse:
    """GET /api/index/stats — counts per key and last build duration."""
    index = await request.app.state.cache.get_index()
    return JSONResponse(index.stats())


async def invalidate_index(request: Request) -> JSONResponse:
    """POST /api/index/invalidate — force a rebuild on next access."""
    request.app.state.cache.invalidate()
    return JSONResponse({"invalidated": True})


def _optional_number(body: dict, key: str, kind: type) -> int | float | None:
    value = body.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float) or not math.isfinite(value):
        raise _BadRequest(f"'{key}' must be a finite number")
    return kind(value)


def _optional_text(body: dict, key: str) -> str | None:
    value = body.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _BadRequest(f"'{key}' must be a string")
    return value or None


def _optional_categories(body: dict) -> list[Category] | None:
    value = body.get("categories")
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(c, str) for c in value):
        raise _BadRequest("'categories' must be a list of strings")
    categories: list[Category] = []
    for name in value:
        parsed = _parse_enum(Category, name, "category")
        if parsed is not None:
            categories.append(Category(parsed))
    return categories


routes = [
    Route("/api/patterns", list_patterns, methods=["GET"]),
    Route("/api/patterns", save_pattern, methods=["POST"]),
    Route("/api/patterns/suggest", suggest_patterns, methods=["POST"]),
    Route("/api/patterns/quality", check_quality, methods=["POST"]),
    Route("/api/patterns/{category}/{slug}", get_pattern, methods=["GET"]),
    Route("/api/patterns/{category}/{slug}", delete_pattern, methods=["DELETE"]),
    Route("/api/patterns/{category}/{slug}/code", pattern_code, methods=["GET"]),
    Route("/api/index/stats", index_stats),
    Route("/api/index/invalidate", invalidate_index, methods=["POST"]),
]
