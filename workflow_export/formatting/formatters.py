"""
Formatter library: coded enumeration values -> display text. Pure functions.

Each formatter looks the code up case-insensitively in a fixed table and
falls back to ``humanize`` for codes it does not know, so new codes in an
export still read as prose instead of SHOUTING_SNAKE_CASE.
"""

from __future__ import annotations

import re
from typing import Any

# Word boundaries: lower/digit -> upper ("fieldType"), and the end of an
# acronym run ("HTTPServer" -> "HTTP Server").
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_WHITESPACE = re.compile(r"\s+")


CONSTRAINT_LABELS: dict[str, str] = {
    "EQ": "equals",
    "NEQ": "not equals",
    "NE": "not equals",
    "LT": "is less than",
    "LTE": "is less than or equal to",
    "LE": "is less than or equal to",
    "GT": "is greater than",
    "GTE": "is greater than or equal to",
    "GE": "is greater than or equal to",
    "CONTAINS": "contains",
    "NOT_CONTAINS": "does not contain",
    "STARTS_WITH": "starts with",
    "ENDS_WITH": "ends with",
    "IN": "is in",
    "NOT_IN": "is not in",
    "BETWEEN": "is between",
    "IS_NULL": "is empty",
    "IS_NOT_NULL": "is not empty",
}

EXCEPTION_TYPE_LABELS: dict[str, str] = {
    "DEFAULT_FLOW": "Halt Parameter Exception",
    "HALT_PARAMETER_EXCEPTION": "Halt Parameter Exception",
    "SKIP_EXCEPTION": "Skip Exception",
    "WARNING_ONLY": "Warning Only",
    "WARNING": "Warning Only",
    "APPROVAL_REQUIRED": "Approval Required",
    "SOFT_EXCEPTION": "Soft Exception",
    "HARD_EXCEPTION": "Hard Exception",
}

SELECTOR_LABELS: dict[str, str] = {
    "CONSTANT": "Constant",
    "PARAMETER": "Parameter",
    "PROPERTY": "Property",
    "VARIABLE": "Variable",
    "EXPRESSION": "Expression",
    "NONE": "None",
}

DATE_UNIT_LABELS: dict[str, str] = {
    "DAYS": "Days from today",
    "DAY": "Days from today",
    "HOURS": "Hours from now",
    "HOUR": "Hours from now",
    "MINUTES": "Minutes from now",
    "MINUTE": "Minutes from now",
    "WEEKS": "Weeks from today",
    "WEEK": "Weeks from today",
    "MONTHS": "Months from today",
    "MONTH": "Months from today",
    "YEARS": "Years from today",
    "YEAR": "Years from today",
}

DEFAULT_EXCEPTION_TYPE = "Default"


def humanize(key: Any) -> str:
    """
    Turn any coded key into sentence-case prose.

    ``fieldType`` -> ``Field type``, ``SOFT_Exception`` -> ``Soft exception``.
    Applying it to its own output changes nothing.
    """
    if key is None or key == "":
        return ""
    s = _CAMEL_BOUNDARY.sub(" ", str(key))
    s = _WHITESPACE.sub(" ", s.replace("_", " ")).strip().lower()
    return s[:1].upper() + s[1:]


def _lookup(code: Any, table: dict[str, str]) -> str:
    text = str(code)
    return table.get(text.strip().upper()) or humanize(text)


def format_constraint(code: Any) -> str:
    """Comparison / containment operator, e.g. ``GTE`` -> ``is greater than or equal to``."""
    if not code:
        return ""
    return _lookup(code, CONSTRAINT_LABELS)


def format_exception_type(code: Any) -> str:
    """Validation exception severity; absent reads ``Default``."""
    if not code:
        return DEFAULT_EXCEPTION_TYPE
    return _lookup(code, EXCEPTION_TYPE_LABELS)


def format_selector(code: Any) -> str:
    """Value selector kind, e.g. ``CONSTANT`` -> ``Constant``."""
    if not code:
        return ""
    return _lookup(code, SELECTOR_LABELS)


def format_date_unit(code: Any) -> str:
    """Relative date unit, e.g. ``DAYS`` -> ``Days from today``."""
    if not code:
        return ""
    return _lookup(code, DATE_UNIT_LABELS)


def is_selector(code: Any, expected: str) -> bool:
    """Case-insensitive selector comparison (``"constant"`` is ``CONSTANT``)."""
    return isinstance(code, str) and code.strip().upper() == expected


def humanize_code(code: Any) -> str:
    """Automation trigger/action codes: underscores to spaces, lowercase."""
    return str(code or "").replace("_", " ").lower()
