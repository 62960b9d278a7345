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
Column descriptor model
The inferred type, length and precision of a single column.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class ColumnType(Enum):
    """Closed set of column types produced by inference."""

    JSON = "json"
    TEXT = "text"
    VARCHAR = "varchar"
    DATE = "date"
    DECIMAL = "decimal"
    FLOAT = "float"
    INT = "int"


TYPE_HIERARCHY: Dict[ColumnType, int] = {
    ColumnType.JSON: 10,
    ColumnType.TEXT: 9,
    ColumnType.VARCHAR: 8,
    ColumnType.DATE: 7,
    ColumnType.DECIMAL: 6,
    ColumnType.FLOAT: 5,
    ColumnType.INT: 4,
}

DEFAULT_VARCHAR_LENGTH = 255
DEFAULT_PRECISION = 2
DECIMAL_DIGITS = 10


@dataclass(frozen=True)
class ColumnDescriptor:
    """Inferred type/length/precision for one field across all sample rows."""

    type: ColumnType
    length: Optional[int] = None
    precision: Optional[int] = None
    column_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "length": self.length,
            "precision": self.precision,
            "columnName": self.column_name,
        }

    def sql_definition(self) -> str:
        """Generic SQL definition, MySQL flavoured."""
        if self.type is ColumnType.VARCHAR:
            return f"VARCHAR({self.length or DEFAULT_VARCHAR_LENGTH})"
        if self.type is ColumnType.FLOAT:
            return f"FLOAT({self.precision or DEFAULT_PRECISION})"
        if self.type is ColumnType.DECIMAL:
            return f"DECIMAL({DECIMAL_DIGITS},{self.precision or DEFAULT_PRECISION})"
        return self.type.value.upper()

    def is_numeric(self) -> bool:
        return self.type in (ColumnType.INT, ColumnType.FLOAT, ColumnType.DECIMAL)

    def is_textual(self) -> bool:
        return self.type in (ColumnType.VARCHAR, ColumnType.TEXT)

    def can_accept(self, other: ColumnType) -> bool:
        """True if values of type ``other`` fit in this column without promotion."""
        return TYPE_HIERARCHY[self.type] >= TYPE_HIERARCHY[other]


TableSchema = Dict[str, ColumnDescriptor]
