"""CLI entry point for designdex."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import cast

import yaml

from designdex import __version__
from designdex.config import CONFIG_FILENAME, Config, configure_logging, load_config
from designdex.patterns.cache import PatternCache
from designdex.patterns.categories import CATEGORIES, FRAMEWORKS, Category, Framework
from designdex.patterns.errors import PatternError, ValidationError
from designdex.patterns.storage import PatternStore


def _config(args: argparse.Namespace) -> Config:
    config = load_config(cast(Path | None, args.config) or Path.cwd() / CONFIG_FILENAME)
    patterns_dir = cast(str | None, args.patterns_dir)
    if patterns_dir:
        config.patterns_dir = patterns_dir
    return config


def _store(args: argparse.Namespace) -> PatternStore:
    return PatternStore(_config(args).patterns_path)


def _fail(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)
    sys.exit(1)


def _print_violations(error: ValidationError) -> None:
    for violation in error.violations:
        print(f"  - {violation.field}: {violation.reason}", file=sys.stderr)


def _cmd_serve(args: argparse.Namespace) -> None:
    from designdex.server.runner import ServerRunningError, run_server

    try:
        run_server(_config(args))
    except ServerRunningError as e:
        _fail(str(e))


def _cmd_list(args: argparse.Namespace) -> None:
    category = cast(str | None, args.category)
    ids = asyncio.run(_store(args).list_patterns(category))
    for pattern_id in ids:
        print(pattern_id)
    print(f"\n{len(ids)} pattern(s)")


def _cmd_show(args: argparse.Namespace) -> None:
    pattern_id = cast(str, args.id)
    try:
        record = asyncio.run(_store(args).load_pattern(pattern_id))
    except ValidationError as e:
        print(f"Error: {pattern_id} is invalid", file=sys.stderr)
        _print_violations(e)
        sys.exit(1)
    except PatternError as e:
        _fail(str(e))
        return
    print(yaml.safe_dump(record.to_document(), sort_keys=False, allow_unicode=True), end="")


def _cmd_search(args: argparse.Namespace) -> None:
    from designdex.patterns.search import SearchOptions, search_patterns

    options = SearchOptions(
        tags=cast(list[str], args.tag) or [],
        category=Category(args.category) if args.category else None,
        framework=Framework(args.framework) if args.framework else None,
    )
    store = _store(args)

    async def run() -> list[str]:
        if args.linear:
            return [p.id for p in await search_patterns(store, options)]
        return await PatternCache(store).search_fast(options)

    try:
        ids = asyncio.run(run())
    except PatternError as e:
        _fail(str(e))
        return
    for pattern_id in ids:
        print(pattern_id)
    print(f"\n{len(ids)} match(es)")


def _cmd_suggest(args: argparse.Namespace) -> None:
    from designdex.integration.suggestions import SuggestionEngine, SuggestOptions

    config = _config(args)
    cache = PatternCache(PatternStore(config.patterns_path))
    engine = SuggestionEngine(cache, config.suggestions)
    options = SuggestOptions(
        text=cast(str, args.text),
        categories=[Category(c) for c in args.category] if args.category else None,
        framework=Framework(args.framework) if args.framework else None,
        limit=cast(int | None, args.limit),
        min_relevance=cast(float | None, args.min_relevance),
    )
    try:
        suggestions = asyncio.run(engine.suggest(options))
    except PatternError as e:
        _fail(str(e))
        return

    if args.json:
        data = [s.model_dump(mode="json", exclude_none=True) for s in suggestions]
        print(json.dumps(data, indent=2))
        return
    if not suggestions:
        print("No relevant patterns found.")
        return
    for i, s in enumerate(suggestions, 1):
        print(f"{i}. {s.pattern.name} [{s.pattern.category}] {s.relevance:.2f}")
        print(f"   {s.id}: {s.reason}")


def _cmd_quality(args: argparse.Namespace) -> None:
    from designdex.integration.quality import QualityLevel, validate_quality

    pattern_id = cast(str, args.id)
    try:
        record = asyncio.run(_store(args).load_pattern(pattern_id))
    except PatternError as e:
        _fail(str(e))
        return

    result = validate_quality(record)
    print(f"{record.name}: {result.level} ({result.score}/100)")
    print(result.summary)
    for issue in result.issues:
        print(f"  [{issue.severity}] {issue.field}: {issue.message}")
        if issue.suggestion:
            print(f"      -> {issue.suggestion}")
    if result.level == QualityLevel.FAILED:
        sys.exit(1)


def _cmd_validate(args: argparse.Namespace) -> None:
    store = _store(args)

    async def run() -> tuple[int, list[ValidationError]]:
        ids = await store.list_patterns()
        results = await asyncio.gather(
            *(store.load_pattern(i) for i in ids), return_exceptions=True
        )
        invalid: list[ValidationError] = []
        for result in results:
            if isinstance(result, ValidationError):
                invalid.append(result)
            elif isinstance(result, BaseException):
                raise result
        return len(ids) - len(invalid), invalid

    valid, invalid = asyncio.run(run())
    for error in invalid:
        print(f"Invalid: {error.source}", file=sys.stderr)
        _print_violations(error)
    print(f"Validated {valid} patterns, {len(invalid)} invalid")
    if invalid:
        sys.exit(1)


def _cmd_import(args: argparse.Namespace) -> None:
    source = cast(Path, args.file)
    if not source.exists():
        _fail(f"file not found: {source}")
    try:
        data = yaml.safe_load(source.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        _fail(f"cannot parse {source}: {e}")
        return
    items = data if isinstance(data, list) else [data]
    store = _store(args)

    async def run() -> int:
        failures = 0
        for n, item in enumerate(items, 1):
            try:
                pattern_id = await store.save_pattern(item)
            except ValidationError as e:
                failures += 1
                print(f"Rejected item {n}:", file=sys.stderr)
                _print_violations(e)
                continue
            print(f"Saved {pattern_id}")
        return failures

    failures = asyncio.run(run())
    print(f"Imported {len(items) - failures} of {len(items)} pattern(s)")
    if failures:
        sys.exit(1)


def _cmd_delete(args: argparse.Namespace) -> None:
    pattern_id = cast(str, args.id)
    removed = asyncio.run(_store(args).delete_pattern(pattern_id))
    print(f"Deleted {pattern_id}" if removed else f"Nothing to delete at {pattern_id}")


def _cmd_generate(args: argparse.Namespace) -> None:
    from designdex.generator.code import generate_code
    from designdex.generator.detector import detect_framework

    pattern_id = cast(str, args.id)
    try:
        record = asyncio.run(_store(args).load_pattern(pattern_id))
    except PatternError as e:
        _fail(str(e))
        return

    choice = cast(str, args.framework)
    if choice == "auto":
        framework = detect_framework(cast(Path | None, args.project_dir))
    else:
        framework = Framework(choice)
    print(generate_code(record, framework), end="")


def _cmd_detect_framework(args: argparse.Namespace) -> None:
    from designdex.generator.detector import detect_framework

    print(detect_framework(cast(Path | None, args.project_dir)))


def _cmd_benchmark(args: argparse.Namespace) -> None:
    from designdex.patterns.benchmark import run_benchmark

    try:
        report = asyncio.run(run_benchmark(PatternCache(_store(args))))
    except PatternError as e:
        _fail(str(e))
        return

    print("Pattern Search Benchmark")
    print("=" * 50)
    print(f"\nIndex build: {report.index_build_ms:.2f}ms ({report.pattern_count} patterns)\n")
    print("Search Results:")
    print("-" * 50)
    for t in report.timings:
        speedup = f"{t.speedup:.1f}x" if t.speedup is not None else "N/A"
        print(f"\nSearch: {json.dumps(t.query)}")
        print(f"  Linear:  {t.linear_ms:.2f}ms ({t.linear_count} results)")
        print(f"  Indexed: {t.indexed_ms:.2f}ms ({t.indexed_count} ids)")
        print(f"  Speedup: {speedup}")
    print("\n" + "=" * 50)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="designdex",
        description="Design-pattern knowledge base: store, search, suggest, generate",
    )
    _ = parser.add_argument("-V", "--version", action="version", version=f"designdex {__version__}")
    _ = parser.add_argument(
        "--patterns-dir", dest="patterns_dir", default=None, help="Pattern store root"
    )
    _ = parser.add_argument(
        "--config", type=Path, default=None, help=f"Config file (default: ./{CONFIG_FILENAME})"
    )
    subparsers = parser.add_subparsers(dest="command")

    categories = [str(c) for c in CATEGORIES]
    frameworks = [str(f) for f in FRAMEWORKS]

    _ = subparsers.add_parser("serve", help="Start the HTTP API server")

    list_p = subparsers.add_parser("list", help="List stored pattern ids")
    _ = list_p.add_argument("--category", choices=categories, default=None)

    show_p = subparsers.add_parser("show", help="Print one pattern as YAML")
    _ = show_p.add_argument("id", help="Pattern id, e.g. layout/css-grid-system.yaml")

    search_p = subparsers.add_parser("search", help="Search patterns by tag, category, framework")
    _ = search_p.add_argument("--tag", action="append", default=[], help="Required tag (repeat)")
    _ = search_p.add_argument("--category", choices=categories, default=None)
    _ = search_p.add_argument("--framework", choices=frameworks, default=None)
    _ = search_p.add_argument(
        "--linear", action="store_true", help="Scan the store instead of using the index"
    )

    suggest_p = subparsers.add_parser("suggest", help="Suggest patterns for a task description")
    _ = suggest_p.add_argument("text", help="Task description")
    _ = suggest_p.add_argument(
        "--category", action="append", choices=categories, default=None, help="Override categories"
    )
    _ = suggest_p.add_argument("--framework", choices=frameworks, default=None)
    _ = suggest_p.add_argument("--limit", type=int, default=None)
    _ = suggest_p.add_argument("--min-relevance", type=float, default=None, dest="min_relevance")
    _ = suggest_p.add_argument("--json", action="store_true", help="Emit JSON")

    quality_p = subparsers.add_parser("quality", help="Run the quality gate on a pattern")
    _ = quality_p.add_argument("id")

    _ = subparsers.add_parser("validate", help="Validate every stored pattern")

    import_p = subparsers.add_parser("import", help="Save patterns from a YAML/JSON file")
    _ = import_p.add_argument("file", type=Path)

    delete_p = subparsers.add_parser("delete", help="Delete a pattern (idempotent)")
    _ = delete_p.add_argument("id")

    gen_p = subparsers.add_parser("generate", help="Generate starter code for a pattern")
    _ = gen_p.add_argument("id")
    _ = gen_p.add_argument("--framework", choices=[*frameworks, "auto"], default="auto")
    _ = gen_p.add_argument("--project-dir", type=Path, default=None, dest="project_dir")

    detect_p = subparsers.add_parser("detect-framework", help="Detect framework from package.json")
    _ = detect_p.add_argument("--project-dir", type=Path, default=None, dest="project_dir")

    _ = subparsers.add_parser("benchmark", help="Compare linear and indexed search timings")

    args = parser.parse_args()
    configure_logging(_config(args).log_level)

    dispatch = {
        "serve": _cmd_serve,
        "list": _cmd_list,
        "show": _cmd_show,
        "search": _cmd_search,
        "suggest": _cmd_suggest,
        "quality": _cmd_quality,
        "validate": _cmd_validate,
        "import": _cmd_import,
        "delete": _cmd_delete,
        "generate": _cmd_generate,
        "detect-framework": _cmd_detect_framework,
        "benchmark": _cmd_benchmark,
    }
    command = cast(str | None, args.command)
    handler = dispatch.get(command) if command is not None else None
    if handler:
        handler(args)
    else:
        parser.print_help()
        sys.exit(1)
