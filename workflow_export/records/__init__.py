"""Flat record columns and the per-parameter record builder."""

from workflow_export.records.builder import (
    TaskFields,
    build_creation_form_records,
    build_record,
    build_task_records,
    options_text,
    verification_flags,
    with_last_flag,
)
from workflow_export.records.columns import COLUMNS, TASK_LEVEL_COLUMNS, FlatRecord

__all__ = [
    "COLUMNS",
    "TASK_LEVEL_COLUMNS",
    "FlatRecord",
    "TaskFields",
    "build_creation_form_records",
    "build_record",
    "build_task_records",
    "options_text",
    "verification_flags",
    "with_last_flag",
]
