"""Error taxonomy for pattern storage and validation."""

from __future__ import annotations

from pydantic import BaseModel


class FieldViolation(BaseModel):
    field: str
    reason: str


class PatternError(Exception):
    """Base class for pattern store failures."""


class ValidationError(PatternError):
    """A record failed schema constraints. Carries every violation found."""

    def __init__(self, violations: list[FieldViolation], *, source: str | None = None) -> None:
        self.violations = violations
        self.source = source
        details = "; ".join(f"{v.field}: {v.reason}" for v in violations)
        prefix = f"Invalid pattern {source}" if source else "Invalid pattern"
        super().__init__(f"{prefix}: {details}")


class NotFoundError(PatternError):
    def __init__(self, pattern_id: str) -> None:
        self.pattern_id = pattern_id
        super().__init__(f"Pattern not found: {pattern_id}")
