"""Quality gate: score one record's completeness and coherence."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from designdex.patterns.categories import Category, Framework
from designdex.patterns.models import PatternRecord

MIN_PRINCIPLES = 3
MIN_TAGS = 2
MIN_DESCRIPTION_LENGTH = 50
MIN_CODE_EXAMPLE_LENGTH = 100

PASS_SCORE = 80
WARN_SCORE = 60


class Severity(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class QualityLevel(StrEnum):
    PASSED = "passed"
    WARNING = "warning"
    FAILED = "failed"


_PENALTIES: dict[Severity, int] = {
    Severity.ERROR: 30,
    Severity.WARNING: 10,
    Severity.INFO: 5,
}

CATEGORY_TAG_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.LAYOUT: ("grid", "flex", "layout", "responsive", "container", "spacing"),
    Category.FORMS: ("form", "input", "validation", "field", "submit", "textarea"),
    Category.NAVIGATION: ("nav", "menu", "breadcrumb", "tabs", "sidebar", "link"),
    Category.MICRO_INTERACTIONS: ("hover", "animation", "transition", "click", "state"),
    Category.DATA_DISPLAY: ("table", "list", "card", "data", "grid", "display"),
    Category.FEEDBACK: ("alert", "toast", "loading", "error", "success", "notification"),
    Category.AUTHENTICATION: ("login", "auth", "password", "signup", "social", "oauth"),
}


class QualityIssue(BaseModel):
    field: str
    severity: Severity
    message: str
    suggestion: str | None = None


class QualityResult(BaseModel):
    level: QualityLevel
    score: int = Field(ge=0, le=100)
    issues: list[QualityIssue] = Field(default_factory=list)
    summary: str


def validate_quality(record: PatternRecord) -> QualityResult:
    issues = _completeness_issues(record) + _code_issues(record) + _coherence_issues(record)

    score = 100 - sum(_PENALTIES[i.severity] for i in issues)
    score = max(0, min(100, score))

    if score >= PASS_SCORE:
        level = QualityLevel.PASSED
    elif score >= WARN_SCORE:
        level = QualityLevel.WARNING
    else:
        level = QualityLevel.FAILED

    return QualityResult(level=level, score=score, issues=issues, summary=_summarize(issues))


def _completeness_issues(record: PatternRecord) -> list[QualityIssue]:
    issues: list[QualityIssue] = []
    if len(record.principles) < MIN_PRINCIPLES:
        issues.append(
            QualityIssue(
                field="principles",
                severity=Severity.WARNING,
                message=(
                    f"Only {len(record.principles)} principles (recommend {MIN_PRINCIPLES}+)"
                ),
                suggestion="Add more design principles for better pattern documentation",
            )
        )
    if len(record.tags) < MIN_TAGS:
        issues.append(
            QualityIssue(
                field="tags",
                severity=Severity.WARNING,
                message=f"Only {len(record.tags)} tag(s) (recommend {MIN_TAGS}+)",
                suggestion="Add more tags for better searchability",
            )
        )
    if record.documentation is not None:
        length = len(record.documentation.description)
        if length < MIN_DESCRIPTION_LENGTH:
            issues.append(
                QualityIssue(
                    field="documentation.description",
                    severity=Severity.WARNING,
                    message=(
                        f"Description is only {length} chars "
                        f"(recommend {MIN_DESCRIPTION_LENGTH}+)"
                    ),
                    suggestion="Provide a more detailed description",
                )
            )
    if record.frameworks and not record.code_examples:
        issues.append(
            QualityIssue(
                field="code_examples",
                severity=Severity.WARNING,
                message="No code examples provided despite framework support",
                suggestion="Add code examples for at least one framework",
            )
        )
    return issues


def _code_issues(record: PatternRecord) -> list[QualityIssue]:
    examples = record.code_examples or {}
    issues: list[QualityIssue] = []
    for framework, code in examples.items():
        if len(code) < MIN_CODE_EXAMPLE_LENGTH:
            issues.append(
                QualityIssue(
                    field=f"code_examples.{framework}",
                    severity=Severity.WARNING,
                    message=f"{framework} example is only {len(code)} chars (may be a stub)",
                    suggestion="Provide a more complete code example",
                )
            )

    react = examples.get(Framework.REACT)
    if react and "<" not in react and ">" not in react:
        issues.append(
            QualityIssue(
                field="code_examples.react",
                severity=Severity.WARNING,
                message="React example appears to lack JSX markup",
                suggestion="Include JSX in React code examples",
            )
        )

    vue = examples.get(Framework.VUE)
    if vue and "template" not in vue and "setup" not in vue:
        issues.append(
            QualityIssue(
                field="code_examples.vue",
                severity=Severity.WARNING,
                message="Vue example appears to lack template or setup section",
                suggestion="Include template or Composition API setup in Vue examples",
            )
        )
    return issues


def _coherence_issues(record: PatternRecord) -> list[QualityIssue]:
    issues: list[QualityIssue] = []
    expected = CATEGORY_TAG_KEYWORDS[record.category]
    tags = [t.lower() for t in record.tags]
    # substring match: "responsive-grid" counts for "grid"
    if not any(keyword in tag for keyword in expected for tag in tags):
        issues.append(
            QualityIssue(
                field="tags",
                severity=Severity.INFO,
                message=f'No tags relate to the "{record.category}" category',
                suggestion=f"Consider adding tags like: {', '.join(expected[:3])}",
            )
        )

    declared = set(record.frameworks)
    for framework in record.code_examples or {}:
        if framework not in declared:
            issues.append(
                QualityIssue(
                    field="frameworks",
                    severity=Severity.INFO,
                    message=(
                        f'Code example exists for "{framework}" '
                        "but it's not in frameworks array"
                    ),
                    suggestion=f'Add "{framework}" to the frameworks array',
                )
            )
    return issues


def _summarize(issues: list[QualityIssue]) -> str:
    if not issues:
        return "Pattern passes all quality checks"
    counts = {s: sum(1 for i in issues if i.severity == s) for s in Severity}
    parts: list[str] = []
    if n := counts[Severity.ERROR]:
        parts.append(f"{n} error{'s' if n > 1 else ''}")
    if n := counts[Severity.WARNING]:
        parts.append(f"{n} warning{'s' if n > 1 else ''}")
    if n := counts[Severity.INFO]:
        parts.append(f"{n} info")
    plural = "s" if len(issues) > 1 else ""
    return f"Pattern has {len(issues)} issue{plural} ({', '.join(parts)})"
