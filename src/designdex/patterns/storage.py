"""PatternStore: YAML-backed CRUD for pattern records, validated at the boundary."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

import yaml

from designdex.patterns.categories import Category
from designdex.patterns.errors import FieldViolation, NotFoundError, ValidationError
from designdex.patterns.models import PatternRecord
from designdex.patterns.validation import DOCUMENT_FIELD, validate_pattern

logger = logging.getLogger(__name__)

PATTERN_EXTENSION = ".yaml"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim hyphens."""
    return _NON_ALNUM_RE.sub("-", name.lower()).strip("-")


def pattern_path(category: Category | str, name: str) -> str:
    """Store id for a record: '<category>/<slug>.yaml'."""
    return f"{Category(category)}/{slugify(name)}{PATTERN_EXTENSION}"


class PatternStore:
    """Flat-file store. Each record lives at <root>/<category>/<slug>.yaml.

    Ids are POSIX paths relative to the root. Every method that touches
    the filesystem is a coroutine; blocking calls run in worker threads.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    async def save_pattern(self, pattern: PatternRecord | dict) -> str:
        """Validate, then write. Returns the id. Overwrites on slug collision."""
        record = validate_pattern(pattern)
        pattern_id = pattern_path(record.category, record.name)
        text = yaml.safe_dump(
            record.to_document(), sort_keys=False, allow_unicode=True, width=100
        )
        await asyncio.to_thread(self._write, self._root / pattern_id, text)
        logger.debug("Saved pattern %s", pattern_id)
        return pattern_id

    async def load_pattern(self, pattern_id: str) -> PatternRecord:
        """Read, parse and re-validate a stored record."""
        path = self._resolve(pattern_id)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            raise NotFoundError(pattern_id) from None
        except UnicodeDecodeError as e:
            raise ValidationError(
                [FieldViolation(field=DOCUMENT_FIELD, reason=f"not valid UTF-8: {e.reason}")],
                source=pattern_id,
            ) from e
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValidationError(
                [FieldViolation(field=DOCUMENT_FIELD, reason=f"unparseable YAML: {e}")],
                source=pattern_id,
            ) from e
        return validate_pattern(data, source=pattern_id)

    async def delete_pattern(self, pattern_id: str) -> bool:
        """Remove a record. Absence is not an error; returns whether a file was removed."""
        try:
            path = self._resolve(pattern_id)
        except NotFoundError:
            return False
        removed = await asyncio.to_thread(_unlink, path)
        if not removed:
            logger.debug("Delete of missing pattern %s ignored", pattern_id)
        return removed

    async def list_patterns(self, category: Category | str | None = None) -> list[str]:
        """Sorted ids of every stored document, optionally scoped to one category."""
        return await asyncio.to_thread(self._list, category)

    async def exists(self, pattern_id: str) -> bool:
        try:
            path = self._resolve(pattern_id)
        except NotFoundError:
            return False
        return await asyncio.to_thread(path.is_file)

    def _resolve(self, pattern_id: str) -> Path:
        root = self._root.resolve()
        path = (root / pattern_id).resolve()
        if not path.is_relative_to(root) or path == root:
            raise NotFoundError(pattern_id)
        return path

    def _list(self, category: Category | str | None) -> list[str]:
        if category is not None:
            base = self._root / Category(category)
            if not base.is_dir():
                return []
            files = base.glob(f"*{PATTERN_EXTENSION}")
        else:
            if not self._root.is_dir():
                return []
            files = self._root.glob(f"**/*{PATTERN_EXTENSION}")
        return sorted(p.relative_to(self._root).as_posix() for p in files if p.is_file())

    @staticmethod
    def _write(path: Path, text: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")


def _unlink(path: Path) -> bool:
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True
