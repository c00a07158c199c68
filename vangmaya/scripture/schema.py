"""Declarative description of the scripture document shape.

The shape is a tree of spec nodes. Each node knows how to check one value and
append :class:`~vangmaya.scripture.models.ValidationIssue` records for whatever
is wrong with it; :data:`SHASTRA_SCHEMA` composes them into the full document.
Making a field required or optional is a change to the tree below, not to the
walker.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .decoding import duplicate_keys_of
from .models import ValidationIssue

MISSING = "missing"
WRONG_TYPE = "wrong type"
INVALID_KEY = "invalid key"
NOT_POSITIVE = "not positive"
KEY_MISMATCH = "key/value mismatch"
DUPLICATE_KEY = "duplicate key"
EMPTY_TEXT = "empty text"
EMPTY = "empty"

_CANONICAL_NUMBER = re.compile(r"[1-9][0-9]*")


def is_canonical_number(key: Any) -> bool:
    """Return True for the decimal form of a positive integer (``"7"``, not ``"07"``)."""

    return isinstance(key, str) and _CANONICAL_NUMBER.fullmatch(key) is not None


def is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def join_path(parent: str, child: Any) -> str:
    return f"{parent}.{child}" if parent else str(child)


class Node:
    """Base spec node."""

    def check(self, value: Any, path: str, issues: list[ValidationIssue]) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class Text(Node):
    """A string, optionally required to contain non-whitespace characters."""

    non_empty: bool = True

    def check(self, value: Any, path: str, issues: list[ValidationIssue]) -> None:
        if not isinstance(value, str):
            issues.append(ValidationIssue(path, WRONG_TYPE))
        elif self.non_empty and not value.strip():
            issues.append(ValidationIssue(path, EMPTY_TEXT))


@dataclass(frozen=True)
class PositiveInt(Node):
    """An integer greater than zero; numeric strings and booleans are rejected."""

    def check(self, value: Any, path: str, issues: list[ValidationIssue]) -> None:
        if not isinstance(value, int) or isinstance(value, bool):
            issues.append(ValidationIssue(path, WRONG_TYPE))
        elif value <= 0:
            issues.append(ValidationIssue(path, NOT_POSITIVE))


@dataclass(frozen=True)
class Field:
    name: str
    node: Node
    required: bool = True


@dataclass(frozen=True)
class Record(Node):
    """A JSON object with named fields; unknown fields are ignored."""

    fields: tuple[Field, ...]

    def check(self, value: Any, path: str, issues: list[ValidationIssue]) -> None:
        if not isinstance(value, Mapping):
            issues.append(ValidationIssue(path, WRONG_TYPE))
            return
        known = {spec.name for spec in self.fields}
        for key in duplicate_keys_of(value):
            if key in known:
                issues.append(ValidationIssue(join_path(path, key), DUPLICATE_KEY))
        for spec in self.fields:
            field_path = join_path(path, spec.name)
            if spec.name not in value:
                if spec.required:
                    issues.append(ValidationIssue(field_path, MISSING))
                continue
            spec.node.check(value[spec.name], field_path, issues)


@dataclass(frozen=True)
class KeyRule:
    """How the keys of a map relate to the entries they hold.

    ``identity`` is the field path inside each entry whose value must equal the
    key. With ``numeric`` the key must be a canonical positive integer and the
    identity value an ``int``; otherwise both are plain strings.
    """

    identity: tuple[str, ...]
    numeric: bool

    def key_is_valid(self, key: Any) -> bool:
        if self.numeric:
            return is_canonical_number(key)
        return isinstance(key, str) and bool(key.strip())

    def identity_of(self, entry: Any) -> Any:
        current = entry
        for name in self.identity:
            if not isinstance(current, Mapping) or name not in current:
                return None
            current = current[name]
        return current

    def mismatched(self, key: Any, entry: Any) -> bool:
        identity = self.identity_of(entry)
        if self.numeric:
            # Wrong-typed identities are reported by the entry's own spec.
            return is_positive_int(identity) and str(identity) != key
        return isinstance(identity, str) and identity != key


@dataclass(frozen=True)
class MapOf(Node):
    """A JSON object used as a dictionary of homogeneous entries."""

    entry: Node
    non_empty: bool = False
    key_rule: KeyRule | None = None
    any_text: str | None = None

    def check(self, value: Any, path: str, issues: list[ValidationIssue]) -> None:
        if not isinstance(value, Mapping):
            issues.append(ValidationIssue(path, WRONG_TYPE))
            return
        if self.non_empty and not value:
            issues.append(ValidationIssue(path, EMPTY))
            return
        for key in duplicate_keys_of(value):
            issues.append(ValidationIssue(join_path(path, key), DUPLICATE_KEY))

        for key, entry in value.items():
            entry_path = join_path(path, key)
            if not isinstance(key, str):
                issues.append(ValidationIssue(entry_path, INVALID_KEY))
            elif self.key_rule is not None:
                if not self.key_rule.key_is_valid(key):
                    issues.append(ValidationIssue(entry_path, INVALID_KEY))
                elif self.key_rule.mismatched(key, entry):
                    issues.append(ValidationIssue(entry_path, KEY_MISMATCH))
            self.entry.check(entry, entry_path, issues)

        if self.any_text is not None and not any(
            _has_text(entry, self.any_text) for entry in value.values()
        ):
            issues.append(ValidationIssue(path, EMPTY_TEXT))


def _has_text(entry: Any, field_name: str) -> bool:
    if not isinstance(entry, Mapping):
        return False
    text = entry.get(field_name)
    return isinstance(text, str) and bool(text.strip())


# ============================================================================
# Document shape
# ============================================================================

VERSE_TEXT = Record(
    (
        Field("text", Text()),
        Field("transliteration", Text(non_empty=False), required=False),
    )
)

COMMENTARY_TEXT = Record((Field("text", Text(non_empty=False)),))

AUTHOR = Record(
    (
        Field("id", Text()),
        Field("name", Text(non_empty=False)),
        Field("tradition", Text(non_empty=False)),
    )
)

COMMENTARY = Record(
    (
        Field("author", AUTHOR),
        Field("languages", MapOf(COMMENTARY_TEXT, non_empty=True, any_text="text")),
    )
)

VERSE = Record(
    (
        Field("number", PositiveInt()),
        Field("languages", MapOf(VERSE_TEXT, non_empty=True)),
        Field(
            "commentaries",
            MapOf(COMMENTARY, key_rule=KeyRule(("author", "id"), numeric=False)),
            required=False,
        ),
    )
)

CHAPTER_TITLE = Record(
    (
        Field("sa", Text(non_empty=False), required=False),
        Field("en", Text(non_empty=False), required=False),
    )
)

CHAPTER = Record(
    (
        Field("number", PositiveInt()),
        Field("title", CHAPTER_TITLE, required=False),
        Field("verses", MapOf(VERSE, key_rule=KeyRule(("number",), numeric=True))),
    )
)

SHASTRA_SCHEMA = Record(
    (Field("chapters", MapOf(CHAPTER, key_rule=KeyRule(("number",), numeric=True))),)
)
