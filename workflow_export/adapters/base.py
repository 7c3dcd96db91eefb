"""
Definition source protocol, unit DTO, and unit parsing.

Contract:
    DefinitionSource.units() yields one DefinitionUnit per parseable unit
    (a .json file, or one .json member of an archive) without parsing it.
    parse_unit() turns one unit into zero or more raw definition objects,
    or raises MalformedDefinitionError for that unit alone.

File I/O only; no knowledge of the definition schema.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Protocol, runtime_checkable

from workflow_kernel.exceptions import MalformedDefinitionError


@dataclass(frozen=True)
class DefinitionUnit:
    """Raw bytes of one definition unit and where they came from."""

    source_name: str  # File name, or "archive.zip:member.json"
    payload: bytes = b""
    read_error: str | None = None  # Set when the bytes could not be read at all


@dataclass(frozen=True)
class SourceProbe:
    """Result of probing a source: which units it would yield."""

    unit_count: int
    unit_names: tuple[str, ...]


@runtime_checkable
class DefinitionSource(Protocol):
    """Protocol for reading definition units from a file."""

    def units(self, source_path: Path) -> Iterator[DefinitionUnit]:
        """Yield one unit per definition file. Does not parse JSON."""
        ...

    def probe(self, source_path: Path) -> SourceProbe:
        """Unit names without reading their contents."""
        ...


def parse_unit(unit: DefinitionUnit, encoding: str = "utf-8-sig") -> list[Any]:
    """
    Decode one unit's text and JSON.

    A top-level array contributes each element; anything else contributes
    itself. Whether each element is a usable definition is decided later.

    Raises:
        MalformedDefinitionError: the bytes are not text in ``encoding``
            (utf-8-sig strips a BOM), or the text is not valid JSON,
            nests too deeply to decode, or could not be read.
    """
    if unit.read_error is not None:
        raise MalformedDefinitionError(unit.source_name, unit.read_error)
    try:
        text = unit.payload.decode(encoding)
    except UnicodeDecodeError as e:
        raise MalformedDefinitionError(unit.source_name, f"not {encoding} text: {e.reason}") from e
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDefinitionError(unit.source_name, f"invalid JSON at line {e.lineno} column {e.colno}: {e.msg}") from e
    except RecursionError as e:
        raise MalformedDefinitionError(unit.source_name, "JSON nested too deeply") from e
    return list(parsed) if isinstance(parsed, list) else [parsed]
