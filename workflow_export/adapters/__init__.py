"""Definition source adapters (file I/O only)."""

from __future__ import annotations

from pathlib import Path

from workflow_export.adapters.base import DefinitionSource, DefinitionUnit, SourceProbe, parse_unit
from workflow_export.adapters.json_adapter import JsonDefinitionAdapter
from workflow_export.adapters.zip_adapter import ZipDefinitionAdapter
from workflow_kernel.exceptions import SourceNotFoundError, UnsupportedSourceError

_ADAPTERS: dict[str, type] = {
    ".json": JsonDefinitionAdapter,
    ".zip": ZipDefinitionAdapter,
}


def adapter_for(source_path: Path) -> DefinitionSource:
    """Pick the adapter by file suffix (case-insensitive)."""
    if not source_path.is_file():
        raise SourceNotFoundError(str(source_path))
    suffix = source_path.suffix.lower()
    adapter_cls = _ADAPTERS.get(suffix)
    if adapter_cls is None:
        raise UnsupportedSourceError(str(source_path), suffix)
    return adapter_cls()


__all__ = [
    "DefinitionSource",
    "DefinitionUnit",
    "SourceProbe",
    "JsonDefinitionAdapter",
    "ZipDefinitionAdapter",
    "adapter_for",
    "parse_unit",
]
