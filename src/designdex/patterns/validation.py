"""Structural validation of raw pattern data into PatternRecord."""

from __future__ import annotations

from typing import Any

import pydantic

from designdex.patterns.errors import FieldViolation, ValidationError
from designdex.patterns.models import PatternRecord

DOCUMENT_FIELD = "<document>"


def validate_pattern(data: Any, *, source: str | None = None) -> PatternRecord:
    """Parse raw data into a PatternRecord, collecting every field violation.

    Accepts a mapping or an existing PatternRecord (re-validated from its dump).
    Raises ValidationError listing all violations, never just the first.
    """
    if isinstance(data, PatternRecord):
        data = data.model_dump()
    if not isinstance(data, dict):
        raise ValidationError(
            [FieldViolation(field=DOCUMENT_FIELD, reason="expected a mapping of pattern fields")],
            source=source,
        )
    try:
        return PatternRecord.model_validate(data)
    except pydantic.ValidationError as e:
        raise ValidationError(_to_violations(e), source=source) from e


def is_valid_pattern(data: Any) -> bool:
    try:
        validate_pattern(data)
    except ValidationError:
        return False
    return True


def _to_violations(error: pydantic.ValidationError) -> list[FieldViolation]:
    violations: list[FieldViolation] = []
    for item in error.errors():
        loc = ".".join(str(part) for part in item["loc"]) or DOCUMENT_FIELD
        violations.append(FieldViolation(field=loc, reason=item["msg"]))
    return violations
