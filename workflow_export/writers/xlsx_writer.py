"""
XLSX writer for flat records (openpyxl).

One worksheet: a header row in the fixed column order, then one row per
record. Every cell is text: control characters Excel rejects are removed
and values starting with ``=`` stay literal instead of becoming formulas.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

from openpyxl import Workbook
from openpyxl.cell import WriteOnlyCell
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from workflow_export.records.columns import COLUMNS, FlatRecord

DEFAULT_SHEET_NAME = "Workflow"


def _text_cell(ws: Any, value: Any) -> Any:
    text = ILLEGAL_CHARACTERS_RE.sub("", "" if value is None else str(value))
    if not text.startswith("="):
        return text
    cell = WriteOnlyCell(ws, value=text)
    cell.data_type = "s"
    return cell


def write_xlsx(
    records: Iterable[FlatRecord],
    path: Path,
    sheet_name: str = DEFAULT_SHEET_NAME,
) -> int:
    """Write records to ``path``; returns the number of data rows written."""
    wb = Workbook(write_only=True)
    ws = wb.create_sheet(title=sheet_name)
    ws.append(list(COLUMNS))
    count = 0
    for record in records:
        ws.append([_text_cell(ws, record.get(c, "")) for c in COLUMNS])
        count += 1
    wb.save(path)
    return count
