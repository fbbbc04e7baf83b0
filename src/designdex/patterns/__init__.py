"""Pattern records: schema, storage, linear search and the indexed cache."""

from designdex.patterns.cache import PatternCache, PatternIndex
from designdex.patterns.categories import CATEGORIES, FRAMEWORKS, Category, Framework, WcagLevel
from designdex.patterns.errors import FieldViolation, NotFoundError, PatternError, ValidationError
from designdex.patterns.models import (
    Accessibility,
    Documentation,
    DocumentationParameter,
    PatternMetadata,
    PatternRecord,
    PatternSource,
    StoredPattern,
)
from designdex.patterns.search import (
    SearchOptions,
    filter_by_category,
    filter_by_framework,
    search_by_tags,
    search_patterns,
)
from designdex.patterns.storage import PatternStore, pattern_path, slugify
from designdex.patterns.validation import validate_pattern

__all__ = [
    "CATEGORIES",
    "FRAMEWORKS",
    "Accessibility",
    "Category",
    "Documentation",
    "DocumentationParameter",
    "FieldViolation",
    "Framework",
    "NotFoundError",
    "PatternCache",
    "PatternError",
    "PatternIndex",
    "PatternMetadata",
    "PatternRecord",
    "PatternSource",
    "PatternStore",
    "SearchOptions",
    "StoredPattern",
    "ValidationError",
    "WcagLevel",
    "filter_by_category",
    "filter_by_framework",
    "pattern_path",
    "search_by_tags",
    "search_patterns",
    "slugify",
    "validate_pattern",
]
