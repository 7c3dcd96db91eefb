"""Tests for identifier canonicalization and value display."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from workflow_kernel.domain.identifiers import (
    canonical_id,
    canonical_task_id,
    display_value,
    embedded_property_id,
    is_hex_id,
)


class TestCanonicalId:
    """A number and its decimal text meet on one key; other text matches exactly."""

    @pytest.mark.parametrize("value", [7, 7.0, "7"])
    def test_numeric_encodings_agree(self, value):
        assert canonical_id(value) == "7"

    @pytest.mark.parametrize("value", [None, "", True, False])
    def test_absent_values(self, value):
        assert canonical_id(value) is None

    def test_text_kept_exactly(self):
        assert canonical_id("  abc ") == "  abc "
        assert canonical_id("   ") == "   "

    def test_leading_zero_is_significant(self):
        assert canonical_id("01") == "01"
        assert canonical_id("01") != canonical_id("1")
        assert canonical_id("007") != canonical_id(7)

    def test_hex_ids_unchanged(self):
        assert canonical_id("692559bba9de4d179f65af5b") == "692559bba9de4d179f65af5b"

    def test_non_integral_float(self):
        assert canonical_id(1.5) == "1.5"

    def test_infinite_float_does_not_raise(self):
        assert canonical_id(float("inf")) == "inf"

    @given(st.integers())
    def test_int_and_its_text_agree(self, n):
        assert canonical_id(n) == canonical_id(str(n)) == str(n)

    @given(st.text())
    def test_idempotent(self, s):
        once = canonical_id(s)
        if once is not None:
            assert canonical_id(once) == once


class TestCanonicalTaskId:
    """Task references also ignore padding and leading zeros."""

    @pytest.mark.parametrize("value", [7, 7.0, "7", "007", " 7 ", "+7"])
    def test_encodings_of_one_task_agree(self, value):
        assert canonical_task_id(value) == "7"

    @pytest.mark.parametrize("value", [None, "", "   ", True])
    def test_absent_values(self, value):
        assert canonical_task_id(value) is None

    def test_negative_and_zero(self):
        assert canonical_task_id("-007") == "-7"
        assert canonical_task_id("-0") == "0"
        assert canonical_task_id("000") == "0"

    def test_long_digit_strings_do_not_overflow(self):
        assert canonical_task_id("0" + "9" * 5000) == "9" * 5000

    def test_other_text_only_stripped(self):
        assert canonical_task_id(" t1 ") == "t1"
        assert canonical_task_id("0x1") == "0x1"

    @given(st.integers())
    def test_agrees_with_canonical_id_for_numbers(self, n):
        assert canonical_task_id(n) == canonical_id(n) == canonical_task_id(f" {n} ")


class TestIsHexId:

    def test_accepts_24_lowercase_hex(self):
        assert is_hex_id("5f1e0a2b3c4d5e6f7a8b9c0d")

    @pytest.mark.parametrize(
        "value",
        ["5F1E0A2B3C4D5E6F7A8B9C0D", "5f1e0a2b3c4d5e6f7a8b9c0", "zzzzzzzzzzzzzzzzzzzzzzzz", 12345, None],
    )
    def test_rejects_everything_else(self, value):
        assert not is_hex_id(value)


class TestEmbeddedPropertyId:

    def test_extracts_after_prefix(self):
        assert embedded_property_id("searchable.abc") == "abc"

    def test_custom_prefix(self):
        assert embedded_property_id("indexed.abc", "indexed") == "abc"

    @pytest.mark.parametrize("key", ["abc", "other.abc", "searchable.", None, 5])
    def test_no_prefix_returns_none(self, key):
        assert embedded_property_id(key) is None


class TestDisplayValue:

    def test_bools_lowercase(self):
        assert display_value(True) == "true"
        assert display_value(False) == "false"

    def test_integral_float_drops_fraction(self):
        assert display_value(25.0) == "25"
        assert display_value(2.5) == "2.5"

    def test_list_comma_joined(self):
        assert display_value([1, "a", True]) == "1,a,true"

    def test_dict_as_json(self):
        assert display_value({"a": 1}) == '{"a": 1}'

    def test_dict_keeps_non_ascii_text(self):
        assert display_value({"unit": "°C"}) == '{"unit": "°C"}'

    def test_none_is_empty(self):
        assert display_value(None) == ""
