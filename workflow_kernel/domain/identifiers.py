"""
Identifier helpers for workflow definitions.

Exported definitions are inconsistent about identifier encoding: the same
option or parameter may be referenced as ``"42"`` in one place and ``42``
in another. Everything that keys a lookup table goes through
``canonical_id`` so that a number and its decimal text land on the same
key; any other text must match exactly (``"01"`` and ``"1"`` are different
options). Task references are looser still and go through
``canonical_task_id``. ZERO I/O.
"""

from __future__ import annotations

import json
import re
from typing import Any

# Object ids in exported definitions are 24-char lowercase hex strings.
HEX_ID_PATTERN = re.compile(r"^[a-f0-9]{24}$")

_INTEGER_TEXT = re.compile(r"^([+-]?)([0-9]+)$")

DEFAULT_PROPERTY_KEY_PREFIX = "searchable"


def canonical_id(value: Any) -> str | None:
    """
    Return the canonical text form of an identifier, or None if absent.

    Integers and integral floats render as plain decimal digits, so ``7``,
    ``7.0`` and ``"7"`` share a key. Strings are kept exactly as given.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    s = str(value)
    return s or None


def canonical_task_id(value: Any) -> str | None:
    """
    Canonical key for a task reference.

    Like ``canonical_id``, but surrounding whitespace is ignored and
    digit-only text is read as a number: ``"007"`` and ``" 7 "`` both
    resolve to task ``7``.
    """
    key = canonical_id(value.strip() if isinstance(value, str) else value)
    if key is None:
        return None
    m = _INTEGER_TEXT.match(key)
    if m is None:
        return key
    digits = m.group(2).lstrip("0") or "0"
    return digits if m.group(1) != "-" or digits == "0" else f"-{digits}"


def is_hex_id(value: Any) -> bool:
    """True if value is a string shaped like an exported object id."""
    return isinstance(value, str) and HEX_ID_PATTERN.match(value) is not None


def embedded_property_id(key: Any, prefix: str = DEFAULT_PROPERTY_KEY_PREFIX) -> str | None:
    """
    Extract the property id from a filter key such as ``searchable.<id>``.

    Returns None when the key does not carry the prefix.
    """
    if not isinstance(key, str) or not key.startswith(f"{prefix}."):
        return None
    parts = key.split(".")
    return parts[1] if len(parts) > 1 and parts[1] else None


def display_value(value: Any) -> str:
    """Render a raw JSON scalar (or list) the way it reads in exported text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(display_value(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
