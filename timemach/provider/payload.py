"""
Decoding of backend JSON output.

The backend prints one JSON document on stdout per invocation: an array of
generation objects for ``list-generations`` and an object with ``added``,
``removed`` and ``modified`` arrays for ``diff``. Anything that does not fit
that shape raises PayloadParseError.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from timemach.errors import PayloadParseError
from timemach.models import DiffResult, Generation

DIFF_FIELDS = ("added", "removed", "modified")


def _load_json(output: str | bytes, what: str) -> Any:
    if isinstance(output, bytes):
        try:
            text = output.decode("utf-8")
        except UnicodeDecodeError as e:
            raise PayloadParseError(f"failed to parse {what}: output is not UTF-8: {e}") from e
    else:
        text = output
    if not text.strip():
        raise PayloadParseError(f"failed to parse {what}: empty output")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadParseError(f"failed to parse {what}: {e}") from e


def parse_timestamp(value: Any) -> datetime:
    """Parse an RFC 3339 / ISO 8601 timestamp.

    Raises:
        PayloadParseError: If the value is not a string or not a valid instant.
    """
    if not isinstance(value, str):
        raise PayloadParseError(
            f"timestamp must be a string (got {type(value).__name__})"
        )
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise PayloadParseError(f"invalid timestamp {value!r}: {e}") from e


def _string_list(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, list):
        raise PayloadParseError(
            f"{field_name} must be an array (got {type(value).__name__})"
        )
    for i, item in enumerate(value):
        if not isinstance(item, str):
            raise PayloadParseError(
                f"{field_name}[{i}] must be a string (got {type(item).__name__})"
            )
    return tuple(value)


def generation_from_dict(data: dict[str, Any]) -> Generation:
    """Convert one decoded generation object to a Generation.

    ``id`` may be a string or an integer. ``description`` may be null and
    ``profiles`` and ``current`` may be absent.
    """
    raw_id = data.get("id")
    if isinstance(raw_id, bool) or not isinstance(raw_id, (str, int)):
        raise PayloadParseError(f"generation id must be a string (got {raw_id!r})")

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        raise PayloadParseError(
            f"generation {raw_id} description must be a string"
        )

    return Generation(
        id=str(raw_id),
        timestamp=parse_timestamp(data.get("timestamp")),
        description=description or "",
        profiles=_string_list(data.get("profiles"), "profiles"),
        current=bool(data.get("current", False)),
    )


def _generations_from_data(data: Any) -> list[Generation]:
    if data is None:
        return []
    if not isinstance(data, list):
        raise PayloadParseError(
            f"generations must be an array (got {type(data).__name__})"
        )

    generations = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise PayloadParseError(
                f"generation at index {i} is not an object (got {type(item).__name__})"
            )
        generations.append(generation_from_dict(item))
    return generations


def parse_generations(output: str | bytes) -> list[Generation]:
    """Decode ``list-generations`` output.

    Args:
        output: Raw stdout of the backend; bytes are decoded as UTF-8.

    Returns:
        Generations in the order the backend printed them.

    Raises:
        PayloadParseError: If the output is not an array of generation objects.
    """
    data = _load_json(output, "generations")
    try:
        return _generations_from_data(data)
    except PayloadParseError as e:
        raise PayloadParseError(f"failed to parse generations: {e}") from e


def parse_diff(output: str | bytes) -> DiffResult:
    """Decode ``diff`` output.

    Keys are matched case-insensitively and a missing key means an empty
    list.

    Raises:
        PayloadParseError: If the output is not an object of string arrays.
    """
    data = _load_json(output, "diff")
    try:
        if not isinstance(data, dict):
            raise PayloadParseError(f"diff must be an object (got {type(data).__name__})")
        lowered = {str(key).lower(): value for key, value in data.items()}
        return DiffResult(
            **{name: _string_list(lowered.get(name), name) for name in DIFF_FIELDS}
        )
    except PayloadParseError as e:
        raise PayloadParseError(f"failed to parse diff: {e}") from e
