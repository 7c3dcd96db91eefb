"""
workflow_export -- flatten workflow definitions into spreadsheet records.

Walks a nested workflow definition (stages -> tasks -> parameters, plus
object/property declarations), resolves internal id references to display
text, renders coded enumerations as prose, and emits one flat record per
(stage, task, parameter).

Architecture:
    formatting -> indexing -> synthesis -> records -> assembler are pure and
    synchronous. adapters (read) and writers (write) are the only file I/O;
    services ties them together. Nothing in workflow_kernel imports from here.
"""

from workflow_export.assembler import assemble_records, stable_partition
from workflow_export.records.columns import COLUMNS, FlatRecord
from workflow_export.stats import RecordStats, summarize_records

__all__ = [
    "COLUMNS",
    "FlatRecord",
    "RecordStats",
    "assemble_records",
    "stable_partition",
    "summarize_records",
]
