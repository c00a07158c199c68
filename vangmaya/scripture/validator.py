"""Structural validation of raw scripture payloads."""

from __future__ import annotations

from typing import Any

from .models import Shastra, ValidationIssue, ValidationResult
from .schema import SHASTRA_SCHEMA, Node


def collect_issues(raw: Any, schema: Node = SHASTRA_SCHEMA) -> list[ValidationIssue]:
    """Walk ``raw`` against ``schema`` and return every issue in document order."""

    issues: list[ValidationIssue] = []
    schema.check(raw, "", issues)
    return issues


def validate(raw: Any) -> ValidationResult:
    """Decide whether ``raw`` is a well-formed scripture document.

    Malformed input never raises; problems come back as
    :class:`ValidationIssue` records. Values are not coerced, so a verse
    ``number`` of ``"3"`` or a chapter key of ``"03"`` is an error rather
    than a number.
    """

    issues = collect_issues(raw)
    if issues:
        return ValidationResult.rejected(issues)
    return ValidationResult.accepted(Shastra.model_validate(raw))
