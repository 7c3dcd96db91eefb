"""Coded enumeration values -> display text."""

from workflow_export.formatting.formatters import (
    format_constraint,
    format_date_unit,
    format_exception_type,
    format_selector,
    humanize,
    humanize_code,
    is_selector,
)

__all__ = [
    "format_constraint",
    "format_date_unit",
    "format_exception_type",
    "format_selector",
    "humanize",
    "humanize_code",
    "is_selector",
]
