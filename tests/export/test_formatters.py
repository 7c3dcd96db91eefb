"""Tests for coded-value formatting (workflow_export/formatting)."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from workflow_export.formatting import (
    format_constraint,
    format_date_unit,
    format_exception_type,
    format_selector,
    humanize,
    humanize_code,
    is_selector,
)


class TestHumanize:

    @pytest.mark.parametrize(
        "key,expected",
        [
            ("fieldType", "Field type"),
            ("SOFT_Exception", "Soft exception"),
            ("HTTPServer", "Http server"),
            ("maxLength2", "Max length2"),
            ("value2Max", "Value2 max"),
            ("  double__underscore ", "Double underscore"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_examples(self, key, expected):
        assert humanize(key) == expected

    @given(st.text(alphabet="abcXYZ019_ ", max_size=30))
    def test_idempotent(self, key):
        once = humanize(key)
        assert humanize(once) == once


class TestTableFormatters:

    def test_constraint_known_case_insensitive(self):
        assert format_constraint("GTE") == "is greater than or equal to"
        assert format_constraint("lte") == "is less than or equal to"

    def test_constraint_unknown_humanized(self):
        assert format_constraint("WITHIN_RANGE") == "Within range"

    def test_constraint_absent(self):
        assert format_constraint(None) == ""

    def test_exception_type(self):
        assert format_exception_type("SOFT_EXCEPTION") == "Soft Exception"
        assert format_exception_type("DEFAULT_FLOW") == "Halt Parameter Exception"
        assert format_exception_type(None) == "Default"
        assert format_exception_type("") == "Default"

    def test_selector(self):
        assert format_selector("CONSTANT") == "Constant"
        assert format_selector("parameter") == "Parameter"
        assert format_selector("CUSTOM_SOURCE") == "Custom source"

    def test_date_unit(self):
        assert format_date_unit("DAYS") == "Days from today"
        assert format_date_unit("HOURS") == "Hours from now"
        assert format_date_unit("FORTNIGHTS") == "Fortnights"


class TestCodes:

    def test_humanize_code(self):
        assert humanize_code("TASK_COMPLETED") == "task completed"
        assert humanize_code(None) == ""

    def test_is_selector(self):
        assert is_selector(" parameter", "PARAMETER")
        assert not is_selector("CONSTANT", "PARAMETER")
        assert not is_selector(None, "PARAMETER")
