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
Element type classification
Decides the elementary column type of a single sample value.
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from schematools.schema import ColumnType

TEXT_LENGTH_THRESHOLD = 255
MIN_PRECISION = 2

MONETARY_KEYWORDS = (
    "decimal",
    "amount",
    "total",
    "cost",
    "price",
    "gst",
    "pst",
    "discount",
)

# Each shape is only accepted when one of its formats also parses to a real date/time.
DATE_PATTERNS = (
    (re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII), ("%Y-%m-%d",)),
    (re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", re.ASCII), ("%Y-%m-%d %H:%M:%S",)),
    (re.compile(r"\d{2}/\d{2}/\d{4}", re.ASCII), ("%m/%d/%Y",)),
    (re.compile(r"\d{2}-\d{2}-\d{4}", re.ASCII), ("%m-%d-%Y",)),
    (re.compile(r"\d{4}/\d{2}/\d{2}", re.ASCII), ("%Y/%m/%d",)),
    (re.compile(r"\d{4}/\d{2}/\d{2} \d{2}:\d{2}:\d{2}", re.ASCII), ("%Y/%m/%d %H:%M:%S",)),
    (re.compile(r"\d{1,2}:\d{2}:\d{2}", re.ASCII), ("%H:%M:%S",)),
    (re.compile(r"\d{1,2}:\d{2}", re.ASCII), ("%H:%M",)),
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z", re.ASCII), ("%Y-%m-%dT%H:%M:%SZ",)),
    (re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d+Z", re.ASCII), ("%Y-%m-%dT%H:%M:%S.%fZ",)),
)

# strptime's %f accepts at most six digits
_LONG_FRACTION = re.compile(r"(\.\d{6})\d+Z$")

NUMERIC_TEXT_PATTERN = re.compile(
    r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII
)
_LEADING_DIGITS = re.compile(r"\d*", re.ASCII)


@dataclass(frozen=True)
class ElementType:
    """Classification of one value before cross-row reconciliation."""

    type: ColumnType
    length: Optional[int] = None
    precision: Optional[int] = None


def is_monetary_column(column_name: Optional[str]) -> bool:
    """True if the column name suggests a currency amount."""
    if not column_name:
        return False
    name = column_name.lower()
    if any(keyword in name for keyword in MONETARY_KEYWORDS):
        return True
    return "tax" in name and "rate" not in name


def is_date_string(value: str) -> bool:
    """
    Check if value is a date/time in one of the recognised formats.

    Shape matching alone is not enough: the value must also parse as a real
    calendar date or clock time, so "13/45/2023" and "1.0.0" are rejected.
    """
    for pattern, formats in DATE_PATTERNS:
        if not pattern.fullmatch(value):
            continue
        candidate = _LONG_FRACTION.sub(r"\1Z", value)
        for fmt in formats:
            try:
                datetime.strptime(candidate, fmt)
                return True
            except ValueError:
                continue
        return False
    return False


def is_numeric_text(value: Any) -> bool:
    """True if value is a string holding a plain or exponent-form number."""
    return isinstance(value, str) and NUMERIC_TEXT_PATTERN.fullmatch(value) is not None


def fractional_precision(text: str) -> int:
    """Digits after the last decimal point, floored at two."""
    if "." not in text:
        return MIN_PRECISION
    fraction = text.rsplit(".", 1)[1]
    digits = _LEADING_DIGITS.match(fraction)
    return max(len(digits.group(0)) if digits else 0, MIN_PRECISION)


def classify_element(value: Any, column_name: Optional[str] = None) -> ElementType:
    """
    Determine the elementary column type for a single value.

    Args:
        value: The raw sample value
        column_name: Optional column name, used to prefer DECIMAL for monetary fields

    Returns:
        ElementType with the type and, where meaningful, length or precision
    """
    if isinstance(value, (Mapping, list, tuple)):
        return ElementType(ColumnType.JSON)

    # bool is a subclass of int, collapse to 0/1 integers
    if isinstance(value, bool):
        return ElementType(ColumnType.INT)

    if isinstance(value, int):
        return ElementType(ColumnType.INT)

    if isinstance(value, (float, Decimal)):
        column_type = ColumnType.DECIMAL if is_monetary_column(column_name) else ColumnType.FLOAT
        canonical = repr(value) if isinstance(value, float) else str(value)
        return ElementType(column_type, precision=fractional_precision(canonical))

    if isinstance(value, str):
        if is_date_string(value):
            return ElementType(ColumnType.DATE)
        length = len(value)
        if length > TEXT_LENGTH_THRESHOLD:
            return ElementType(ColumnType.TEXT, length=length)
        return ElementType(ColumnType.VARCHAR, length=length)

    return ElementType(ColumnType.VARCHAR, length=0)
