"""
Export service: load -> flatten -> write.

Orchestrates source adapters, the assembler, and the writers. Each unit
(a .json file or one archive member) and each definition inside it is
processed independently: under ErrorPolicy.SKIP a failing unit is logged
and left out, under ErrorPolicy.ABORT the first failure raises
BatchAbortedError and nothing is written.

Uses structured logging (LogContext, get_logger("export.*")).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable
from uuid import uuid4

from workflow_config.schema import ErrorPolicy, ExportConfig
from workflow_export.adapters import adapter_for, parse_unit
from workflow_export.adapters.base import DefinitionUnit, SourceProbe
from workflow_export.assembler import assemble_records
from workflow_export.records.columns import FlatRecord
from workflow_export.stats import RecordStats, summarize_records
from workflow_export.writers.csv_writer import write_csv
from workflow_export.writers.xlsx_writer import write_xlsx
from workflow_kernel.domain.types import WorkflowDefinition, parse_definition
from workflow_kernel.exceptions import BatchAbortedError, DefinitionError
from workflow_kernel.logging_config import LogContext, get_logger

logger = get_logger("export.service")

FORMAT_CSV = "csv"
FORMAT_XLSX = "xlsx"
SUPPORTED_FORMATS = (FORMAT_CSV, FORMAT_XLSX)


@dataclass(frozen=True)
class UnitFailure:
    """A unit (or one definition inside it) that produced no records."""

    source_name: str
    code: str
    reason: str


@dataclass(frozen=True)
class ExportResult:
    """Outcome of one export run."""

    records: tuple[FlatRecord, ...]
    stats: RecordStats
    written: tuple[Path, ...] = ()
    failures: tuple[UnitFailure, ...] = ()
    definition_count: int = 0


class ExportService:
    """Convert workflow definition sources into flat record files."""

    def __init__(self, config: ExportConfig | None = None):
        self._config = config or ExportConfig()

    @property
    def config(self) -> ExportConfig:
        return self._config

    # -----------------------------------------------------------------
    # Loading
    # -----------------------------------------------------------------

    def probe(self, source_path: Path) -> SourceProbe:
        """Units the source would yield, without parsing them."""
        return adapter_for(Path(source_path)).probe(Path(source_path))

    def _fail(self, failures: list[UnitFailure], source_name: str, exc: DefinitionError) -> None:
        if self._config.on_error is ErrorPolicy.ABORT:
            logger.error("batch_aborted", extra={"failed_source": source_name, "error_code": exc.code})
            raise BatchAbortedError(source_name, exc.code, str(exc)) from exc
        logger.warning(
            "unit_skipped",
            extra={"failed_source": source_name, "error_code": exc.code, "reason": str(exc)},
        )
        failures.append(UnitFailure(source_name=source_name, code=exc.code, reason=str(exc)))

    def _load_unit(self, unit: DefinitionUnit, failures: list[UnitFailure]) -> list[WorkflowDefinition]:
        try:
            raw_items = parse_unit(unit)
        except DefinitionError as exc:
            self._fail(failures, unit.source_name, exc)
            return []

        definitions: list[WorkflowDefinition] = []
        for position, raw in enumerate(raw_items, start=1):
            name = unit.source_name if len(raw_items) == 1 else f"{unit.source_name}[{position}]"
            try:
                definitions.append(parse_definition(raw))
            except DefinitionError as exc:
                self._fail(failures, name, exc)
        return definitions

    def load_definitions(self, source_path: Path) -> tuple[list[WorkflowDefinition], list[UnitFailure]]:
        """
        Read and parse every unit of a source.

        Raises:
            SourceNotFoundError / UnsupportedSourceError: bad source path.
            MalformedDefinitionError: the archive itself is unreadable.
            BatchAbortedError: a unit failed under ErrorPolicy.ABORT.
        """
        source_path = Path(source_path)
        adapter = adapter_for(source_path)
        failures: list[UnitFailure] = []
        definitions: list[WorkflowDefinition] = []
        for unit in adapter.units(source_path):
            with LogContext.bind(source_name=unit.source_name):
                loaded = self._load_unit(unit, failures)
                logger.debug("unit_loaded", extra={"definition_count": len(loaded)})
            definitions.extend(loaded)
        return definitions, failures

    # -----------------------------------------------------------------
    # Conversion and output
    # -----------------------------------------------------------------

    def convert_definitions(self, definitions: Iterable[WorkflowDefinition | Any]) -> list[FlatRecord]:
        """In-memory variant: definitions (typed or raw) -> ordered records."""
        return assemble_records(list(definitions), self._config)

    def write(self, records: list[FlatRecord], output_dir: Path, formats: Iterable[str]) -> tuple[Path, ...]:
        """Write ``records`` in each requested format; returns the paths written."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []
        for fmt in dict.fromkeys(f.lower() for f in formats):
            if fmt == FORMAT_CSV:
                path = output_dir / self._config.csv.filename
                write_csv(records, path, delimiter=self._config.csv.delimiter, encoding=self._config.csv.encoding)
            elif fmt == FORMAT_XLSX:
                path = output_dir / self._config.xlsx.filename
                write_xlsx(records, path, sheet_name=self._config.xlsx.sheet_name)
            else:
                raise ValueError(f"Unsupported output format {fmt!r}; expected one of {SUPPORTED_FORMATS}")
            logger.info("export_written", extra={"format": fmt, "path": str(path), "record_count": len(records)})
            written.append(path)
        return tuple(written)

    def run(
        self,
        source_path: Path,
        output_dir: Path | None = None,
        formats: Iterable[str] = (FORMAT_CSV,),
    ) -> ExportResult:
        """
        Full pipeline for one source file.

        With ``output_dir`` None nothing is written; the result still holds
        the records and their stats. Files are only written when at least
        one record was produced.
        """
        source_path = Path(source_path)
        with LogContext.bind(correlation_id=str(uuid4())):
            logger.info("export_started", extra={"source": str(source_path)})
            definitions, failures = self.load_definitions(source_path)
            records = self.convert_definitions(definitions)
            stats = summarize_records(records, self._config.placeholder)

            written: tuple[Path, ...] = ()
            if output_dir is not None and records:
                written = self.write(records, output_dir, formats)

            logger.info(
                "export_completed",
                extra={
                    "definition_count": len(definitions),
                    "failed_unit_count": len(failures),
                    **stats.as_dict(),
                },
            )
        return ExportResult(
            records=tuple(records),
            stats=stats,
            written=written,
            failures=tuple(failures),
            definition_count=len(definitions),
        )
