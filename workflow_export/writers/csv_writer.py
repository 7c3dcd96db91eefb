"""
Delimited-text writer for flat records.

Uses csv.DictWriter with minimal quoting. The default delimiter is ``;``
because synthesized columns routinely contain commas; fields holding the
delimiter, quotes, or newlines are quoted.
"""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import Iterable, TextIO

from workflow_export.records.columns import COLUMNS, FlatRecord

DEFAULT_DELIMITER = ";"


def _write(records: Iterable[FlatRecord], out: TextIO, delimiter: str) -> int:
    writer = csv.DictWriter(
        out,
        fieldnames=list(COLUMNS),
        delimiter=delimiter,
        quoting=csv.QUOTE_MINIMAL,
        lineterminator="\r\n",
        extrasaction="ignore",
        restval="",
    )
    writer.writeheader()
    count = 0
    for record in records:
        writer.writerow(record)
        count += 1
    return count


def records_to_csv_text(records: Iterable[FlatRecord], delimiter: str = DEFAULT_DELIMITER) -> str:
    """Render records (header first) as delimited text."""
    buf = io.StringIO()
    _write(records, buf, delimiter)
    return buf.getvalue()


def write_csv(
    records: Iterable[FlatRecord],
    path: Path,
    delimiter: str = DEFAULT_DELIMITER,
    encoding: str = "utf-8",
) -> int:
    """Write records to ``path``; returns the number of data rows written."""
    with path.open("w", encoding=encoding, newline="") as f:
        return _write(records, f, delimiter)
