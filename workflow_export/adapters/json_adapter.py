"""JSON source adapter: a single .json file is a single unit."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

from workflow_export.adapters.base import DefinitionUnit, SourceProbe


class JsonDefinitionAdapter:
    """Read one JSON file holding a definition or an array of definitions."""

    def units(self, source_path: Path) -> Iterator[DefinitionUnit]:
        yield DefinitionUnit(source_name=source_path.name, payload=source_path.read_bytes())

    def probe(self, source_path: Path) -> SourceProbe:
        return SourceProbe(unit_count=1, unit_names=(source_path.name,))
