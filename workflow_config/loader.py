"""
Configuration loader (``workflow_config.loader``).

Loads a YAML fragment and parses it into ``workflow_config.schema``
dataclasses. Callers go through ``workflow_config.get_export_config()``.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Unknown key, wrong type, or out-of-range value -> ``InvalidConfigError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from workflow_config.schema import CsvExportDef, ErrorPolicy, ExportConfig, XlsxExportDef
from workflow_kernel.exceptions import InvalidConfigError

_ROOT_KEYS = frozenset({
    "placeholder",
    "creation_form_stage",
    "performer_label",
    "property_key_prefix",
    "on_error",
    "csv",
    "xlsx",
})
_CSV_KEYS = frozenset({"delimiter", "encoding", "filename"})
_XLSX_KEYS = frozenset({"sheet_name", "filename"})

# Excel rejects these in sheet titles
_SHEET_NAME_FORBIDDEN = frozenset("[]:*?/\\")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        InvalidConfigError: if the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidConfigError("<root>", f"expected a mapping, got {type(data).__name__}")
    return data


def _check_keys(data: dict[str, Any], allowed: frozenset[str], scope: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise InvalidConfigError(f"{scope}{unknown[0]}", "unknown key")


def _string(data: dict[str, Any], key: str, default: str, scope: str = "", allow_empty: bool = False) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise InvalidConfigError(f"{scope}{key}", f"expected a string, got {type(value).__name__}")
    if not allow_empty and not value:
        raise InvalidConfigError(f"{scope}{key}", "must not be empty")
    return value


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise InvalidConfigError(key, f"expected a mapping, got {type(value).__name__}")
    return value


def parse_csv_def(data: dict[str, Any]) -> CsvExportDef:
    """Parse the ``csv`` section."""
    _check_keys(data, _CSV_KEYS, "csv.")
    defaults = CsvExportDef()
    delimiter = _string(data, "delimiter", defaults.delimiter, "csv.")
    if len(delimiter) != 1:
        raise InvalidConfigError("csv.delimiter", "must be a single character")
    if delimiter in ('"', "\n", "\r"):
        raise InvalidConfigError("csv.delimiter", f"{delimiter!r} cannot be used as a delimiter")
    return CsvExportDef(
        delimiter=delimiter,
        encoding=_string(data, "encoding", defaults.encoding, "csv."),
        filename=_string(data, "filename", defaults.filename, "csv."),
    )


def parse_xlsx_def(data: dict[str, Any]) -> XlsxExportDef:
    """Parse the ``xlsx`` section."""
    _check_keys(data, _XLSX_KEYS, "xlsx.")
    defaults = XlsxExportDef()
    sheet_name = _string(data, "sheet_name", defaults.sheet_name, "xlsx.")
    if len(sheet_name) > 31 or _SHEET_NAME_FORBIDDEN & set(sheet_name):
        raise InvalidConfigError("xlsx.sheet_name", "must be at most 31 characters without []:*?/\\")
    return XlsxExportDef(
        sheet_name=sheet_name,
        filename=_string(data, "filename", defaults.filename, "xlsx."),
    )


def parse_error_policy(value: Any) -> ErrorPolicy:
    """Parse ``on_error`` (``skip`` or ``abort``)."""
    try:
        return ErrorPolicy(str(value).strip().lower())
    except ValueError:
        choices = ", ".join(p.value for p in ErrorPolicy)
        raise InvalidConfigError("on_error", f"expected one of {choices}, got {value!r}") from None


def parse_export_config(data: dict[str, Any]) -> ExportConfig:
    """
    Parse an ``ExportConfig`` from a dict.

    Postconditions:
        - Missing keys take the schema defaults.
    Raises:
        InvalidConfigError: unknown keys or invalid values.
    """
    _check_keys(data, _ROOT_KEYS, "")
    defaults = ExportConfig()
    return ExportConfig(
        placeholder=_string(data, "placeholder", defaults.placeholder, allow_empty=True),
        creation_form_stage=_string(data, "creation_form_stage", defaults.creation_form_stage),
        performer_label=_string(data, "performer_label", defaults.performer_label),
        property_key_prefix=_string(data, "property_key_prefix", defaults.property_key_prefix),
        on_error=parse_error_policy(data.get("on_error", defaults.on_error.value)),
        csv=parse_csv_def(_section(data, "csv")),
        xlsx=parse_xlsx_def(_section(data, "xlsx")),
    )
