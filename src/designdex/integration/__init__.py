"""Context analysis, suggestions and quality gates built on the pattern index."""

from designdex.integration.config import SuggestionsConfig
from designdex.integration.context import (
    CATEGORY_KEYWORDS,
    TaskContext,
    analyze_task_context,
    extract_categories,
)
from designdex.integration.quality import QualityIssue, QualityResult, validate_quality
from designdex.integration.suggestions import (
    PatternSuggestion,
    SuggestionEngine,
    SuggestOptions,
)

__all__ = [
    "CATEGORY_KEYWORDS",
    "PatternSuggestion",
    "QualityIssue",
    "QualityResult",
    "SuggestOptions",
    "SuggestionEngine",
    "SuggestionsConfig",
    "TaskContext",
    "analyze_task_context",
    "extract_categories",
    "validate_quality",
]
