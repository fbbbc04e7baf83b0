"""Pydantic models for pattern records and their indexed projection."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Annotated
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from designdex.patterns.categories import Category, Framework, WcagLevel

NonEmptyStr = Annotated[str, StringConstraints(min_length=1)]

_ALNUM_RE = re.compile(r"[A-Za-z0-9]")


class Accessibility(BaseModel):
    model_config = ConfigDict(extra="forbid")

    notes: str
    wcag_level: WcagLevel | None = None


class PatternSource(BaseModel):
    model_config = ConfigDict(extra="forbid")

    url: str | None = None
    extracted: str | None = None

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str | None) -> str | None:
        if value is None:
            return value
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("must be an http(s) URL")
        return value


class DocumentationParameter(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: NonEmptyStr
    type: str = "string"
    description: str = ""
    required: bool = False
    default: str | None = None


class Documentation(BaseModel):
    model_config = ConfigDict(extra="forbid")

    description: str = Field(min_length=10, max_length=500)
    usage: str | None = None
    parameters: list[DocumentationParameter] = Field(default_factory=list)
    best_practices: list[NonEmptyStr] = Field(default_factory=list)
    related: list[NonEmptyStr] = Field(default_factory=list)


class PatternRecord(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=3, max_length=100)
    category: Category
    tags: list[NonEmptyStr] = Field(min_length=1)
    frameworks: list[Framework] = Field(min_length=1)
    principles: list[NonEmptyStr] = Field(min_length=1)
    accessibility: Accessibility | None = None
    code_examples: dict[Framework, NonEmptyStr] | None = None
    source: PatternSource | None = None
    documentation: Documentation | None = None

    @field_validator("name")
    @classmethod
    def _check_sluggable(cls, value: str) -> str:
        if not _ALNUM_RE.search(value):
            raise ValueError("must contain at least one letter or digit")
        return value

    def to_document(self) -> dict:
        """Plain-data form written to disk and returned over HTTP."""
        return self.model_dump(mode="json", exclude_none=True)


class PatternMetadata(BaseModel):
    """Lightweight projection of a record kept in the index."""

    id: str
    name: str
    category: Category
    tags: list[str]
    frameworks: list[Framework]

    @classmethod
    def from_record(cls, pattern_id: str, record: PatternRecord) -> PatternMetadata:
        return cls(
            id=pattern_id,
            name=record.name,
            category=record.category,
            tags=list(record.tags),
            frameworks=list(record.frameworks),
        )


@dataclass(frozen=True)
class StoredPattern:
    """A loaded record paired with the store id it was read from."""

    id: str
    record: PatternRecord
