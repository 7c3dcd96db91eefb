"""
workflow_config -- single public entrypoint for export configuration.

Responsibility:
    ``get_export_config()`` is the only way the export service and the
    command line obtain settings. With no path it returns the schema
    defaults; with a path it loads and validates a YAML fragment.

Failure modes:
    - ``FileNotFoundError`` -- the given YAML file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``InvalidConfigError`` -- unknown keys or invalid values.
"""

from __future__ import annotations

from pathlib import Path

from workflow_config.loader import load_yaml_file, parse_export_config
from workflow_config.schema import CsvExportDef, ErrorPolicy, ExportConfig, XlsxExportDef
from workflow_kernel.logging_config import get_logger

_logger = get_logger("config")


def get_export_config(path: Path | str | None = None) -> ExportConfig:
    """Return the export configuration, from ``path`` if given."""
    if path is None:
        config = ExportConfig()
        source = "<defaults>"
    else:
        config = parse_export_config(load_yaml_file(Path(path)))
        source = str(path)

    _logger.info(
        "export_config_loaded",
        extra={
            "config_source": source,
            "placeholder": config.placeholder,
            "creation_form_stage": config.creation_form_stage,
            "on_error": config.on_error.value,
            "csv_delimiter": config.csv.delimiter,
        },
    )
    return config


__all__ = [
    "CsvExportDef",
    "ErrorPolicy",
    "ExportConfig",
    "XlsxExportDef",
    "get_export_config",
]
