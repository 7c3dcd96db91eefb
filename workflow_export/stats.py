"""Summary counts over a flat record list (shown after an export run)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from workflow_export.constants import PLACEHOLDER
from workflow_export.records import columns as col
from workflow_export.records.columns import FlatRecord


@dataclass(frozen=True)
class RecordStats:
    """Counts of rows, stages, and rows carrying each kind of rule text."""

    total_rows: int = 0
    stages: int = 0
    mandatory: int = 0
    automations: int = 0
    dependencies: int = 0
    validations: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "total_rows": self.total_rows,
            "stages": self.stages,
            "mandatory": self.mandatory,
            "automations": self.automations,
            "dependencies": self.dependencies,
            "validations": self.validations,
        }


def summarize_records(records: Iterable[FlatRecord], placeholder: str = PLACEHOLDER) -> RecordStats:
    """Count rows by the columns the export summary reports on."""
    stages: set[str] = set()
    total = mandatory = automations = dependencies = validations = 0
    for r in records:
        total += 1
        if r.get(col.STAGE_NAME):
            stages.add(r[col.STAGE_NAME])
        if (r.get(col.FIELD_TYPE) or "").lower() == "mandatory":
            mandatory += 1
        if r.get(col.AUTOMATION):
            automations += 1
        if r.get(col.DEPENDENCIES) and r[col.DEPENDENCIES] != placeholder:
            dependencies += 1
        if r.get(col.VALIDATIONS) and r[col.VALIDATIONS] != placeholder:
            validations += 1
    return RecordStats(
        total_rows=total,
        stages=len(stages),
        mandatory=mandatory,
        automations=automations,
        dependencies=dependencies,
        validations=validations,
    )
