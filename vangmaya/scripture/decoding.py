"""JSON decoding that keeps track of duplicated object keys."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class RawMapping(dict):
    """Decoded JSON object remembering keys that appeared more than once.

    The last occurrence wins, matching :func:`json.loads`, but the repeated keys
    are kept in :attr:`duplicate_keys` in the order they were first repeated.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.duplicate_keys: list[str] = []


def _collect_pairs(pairs: list[tuple[str, Any]]) -> RawMapping:
    mapping = RawMapping()
    for key, value in pairs:
        if key in mapping and key not in mapping.duplicate_keys:
            mapping.duplicate_keys.append(key)
        mapping[key] = value
    return mapping


def decode_payload(data: str | bytes) -> Any:
    """Decode JSON text into plain values with :class:`RawMapping` objects.

    Raises ``ValueError`` for malformed text, undecodable bytes, or nesting too
    deep to decode.
    """

    try:
        return json.loads(data, object_pairs_hook=_collect_pairs)
    except RecursionError as exc:
        raise ValueError("JSON document is nested too deeply") from exc


def duplicate_keys_of(value: Any) -> list[str]:
    """Return the duplicated keys recorded on ``value``, if any."""

    return list(getattr(value, "duplicate_keys", ()))


def load_payload_file(path: Path | str) -> Any:
    """Read and decode a JSON payload file."""

    file_path = Path(path)
    with file_path.open("rb") as handle:
        return decode_payload(handle.read())
