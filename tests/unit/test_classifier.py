# Copyright 2025 Michael Anckaert
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Unit tests for element type classification.
"""

from decimal import Decimal

import pytest

from schematools.inference.classifier import (
    ElementType,
    classify_element,
    fractional_precision,
    is_date_string,
    is_monetary_column,
    is_numeric_text,
)
from schematools.schema import ColumnType


class TestMonetaryColumn:
    """Test the name-based monetary heuristic."""

    @pytest.mark.parametrize(
        "name",
        ["unit_price", "TOTAL", "discount_pct", "gst", "pst_amount", "shipping_cost", "decimal_value"],
    )
    def test_monetary_keywords(self, name):
        """Test that every monetary keyword is recognised case-insensitively."""
        assert is_monetary_column(name) is True

    def test_tax_without_rate(self):
        """Test that tax columns are monetary unless they describe a rate."""
        assert is_monetary_column("sales_tax") is True
        assert is_monetary_column("tax_rate") is False
        assert is_monetary_column("TaxRate") is False

    def test_non_monetary_names(self):
        """Test names without any keyword."""
        assert is_monetary_column("quantity") is False
        assert is_monetary_column("latitude") is False
        assert is_monetary_column("") is False
        assert is_monetary_column(None) is False


class TestDateString:
    """Test date/time string detection."""

    @pytest.mark.parametrize(
        "value",
        [
            "2023-01-01",
            "2023-01-01 13:45:00",
            "01/31/2023",
            "12-25-2023",
            "2023/01/31",
            "2023/01/31 08:00:00",
            "8:05:30",
            "12:30",
            "2023-01-01T10:00:00Z",
            "2023-01-01T10:00:00.123Z",
            "2023-01-01T10:00:00.1234567Z",
        ],
    )
    def test_recognised_formats(self, value):
        """Test each supported shape with a valid calendar value."""
        assert is_date_string(value) is True

    @pytest.mark.parametrize(
        "value",
        ["13/45/2023", "2023-02-30", "25:00", "2023-13-01", "1.0.0", "hello", "20230101", "2023-01-01T10:00:00"],
    )
    def test_rejected_values(self, value):
        """Test that shape-only matches and other strings are not dates."""
        assert is_date_string(value) is False


class TestNumericText:
    """Test numeric text detection and precision extraction."""

    def test_numeric_text(self):
        """Test plain, signed, exponent and padded numbers."""
        assert is_numeric_text("10") is True
        assert is_numeric_text("-20.5") is True
        assert is_numeric_text(" 42 ") is True
        assert is_numeric_text("1e5") is True
        assert is_numeric_text(".5") is True

    def test_non_numeric_text(self):
        """Test values that only look partly numeric."""
        assert is_numeric_text("1.0.0") is False
        assert is_numeric_text("12abc") is False
        assert is_numeric_text("") is False
        assert is_numeric_text(10) is False

    def test_fractional_precision(self):
        """Test digits after the decimal point with a floor of two."""
        assert fractional_precision("3.14159") == 5
        assert fractional_precision("19.99") == 2
        assert fractional_precision("5.5") == 2
        assert fractional_precision("10") == 2
        assert fractional_precision("1.5e3") == 2


class TestClassifyElement:
    """Test classification of single values."""

    def test_composites_are_json(self):
        """Test that lists and mappings classify as JSON without length."""
        assert classify_element([1, 2]) == ElementType(ColumnType.JSON)
        assert classify_element({"a": 1}) == ElementType(ColumnType.JSON)
        assert classify_element([]) == ElementType(ColumnType.JSON)

    def test_booleans_are_int(self):
        """Test that booleans collapse to integers."""
        assert classify_element(True) == ElementType(ColumnType.INT)
        assert classify_element(False) == ElementType(ColumnType.INT)

    def test_integers(self):
        """Test integral numbers."""
        assert classify_element(42) == ElementType(ColumnType.INT)
        assert classify_element(-7, "unit_price") == ElementType(ColumnType.INT)

    def test_float_uses_column_name(self):
        """Test that floats become DECIMAL only for monetary column names."""
        assert classify_element(19.99, "unit_price") == ElementType(ColumnType.DECIMAL, precision=2)
        assert classify_element(19.99, "quantity") == ElementType(ColumnType.FLOAT, precision=2)
        assert classify_element(19.99) == ElementType(ColumnType.FLOAT, precision=2)

    def test_float_precision(self):
        """Test precision taken from the canonical string form."""
        assert classify_element(3.14159).precision == 5
        assert classify_element(2.0).precision == 2
        assert classify_element(Decimal("1.2345"), "amount") == ElementType(
            ColumnType.DECIMAL, precision=4
        )

    def test_date_strings(self):
        """Test that valid date strings classify as DATE and invalid ones as VARCHAR."""
        assert classify_element("2023-01-01") == ElementType(ColumnType.DATE)
        assert classify_element("13/45/2023") == ElementType(ColumnType.VARCHAR, length=10)

    def test_version_string_is_varchar(self):
        """Test that version strings are never dates."""
        assert classify_element("1.0.0") == ElementType(ColumnType.VARCHAR, length=5)

    def test_string_length_boundary(self):
        """Test the 255 character boundary between VARCHAR and TEXT."""
        assert classify_element("x" * 255) == ElementType(ColumnType.VARCHAR, length=255)
        assert classify_element("x" * 256) == ElementType(ColumnType.TEXT, length=256)

    def test_varchar_records_observed_length(self):
        """Test that the literal length is recorded."""
        assert classify_element("abc").length == 3
        assert classify_element("").length == 0

    def test_unrecognised_values_fall_back_to_varchar(self):
        """Test the fallback branch never raises."""
        assert classify_element(None) == ElementType(ColumnType.VARCHAR, length=0)
        assert classify_element(object()) == ElementType(ColumnType.VARCHAR, length=0)
        assert classify_element(b"bytes") == ElementType(ColumnType.VARCHAR, length=0)
