"""
ExportConfig schema.

Human-authored export settings. YAML fragments are parsed into these types
by the loader; the export service and the record builder read them. Every
field has a default, so an empty fragment yields the stock behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from workflow_kernel.domain.identifiers import DEFAULT_PROPERTY_KEY_PREFIX


class ErrorPolicy(str, Enum):
    """What to do when one definition unit in a batch fails to load."""

    SKIP = "skip"  # Log the failure, continue with the next unit
    ABORT = "abort"  # Stop the batch, raise BatchAbortedError


# ---------------------------------------------------------------------------
# Output formats
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CsvExportDef:
    """Delimited-text output settings."""

    delimiter: str = ";"  # Not a comma: synthesized text contains commas
    encoding: str = "utf-8"
    filename: str = "workflow_extracted.csv"


@dataclass(frozen=True)
class XlsxExportDef:
    """Spreadsheet output settings."""

    sheet_name: str = "Workflow"
    filename: str = "workflow_extracted.xlsx"


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExportConfig:
    """Complete export configuration."""

    placeholder: str = "N/A"
    creation_form_stage: str = "Create Job Form"
    performer_label: str = "Performer/Verifier"
    property_key_prefix: str = DEFAULT_PROPERTY_KEY_PREFIX
    on_error: ErrorPolicy = ErrorPolicy.SKIP
    csv: CsvExportDef = field(default_factory=CsvExportDef)
    xlsx: XlsxExportDef = field(default_factory=XlsxExportDef)
