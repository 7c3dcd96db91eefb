"""Export orchestration: sources -> records -> files."""

from workflow_export.services.export_service import (
    SUPPORTED_FORMATS,
    ExportResult,
    ExportService,
    UnitFailure,
)

__all__ = ["SUPPORTED_FORMATS", "ExportResult", "ExportService", "UnitFailure"]
