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
Unit tests for the column descriptor model.
"""

import pytest

from schematools.schema import TYPE_HIERARCHY, ColumnDescriptor, ColumnType


class TestColumnType:
    """Test ColumnType enum."""

    def test_column_type_values(self):
        """Test that the closed set of types has the expected values."""
        assert {t.value for t in ColumnType} == {
            "json", "text", "varchar", "date", "decimal", "float", "int"
        }

    def test_hierarchy_order(self):
        """Test that the ranks run from json down to int."""
        ranked = sorted(TYPE_HIERARCHY, key=TYPE_HIERARCHY.get, reverse=True)

        assert [t.value for t in ranked] == [
            "json", "text", "varchar", "date", "decimal", "float", "int"
        ]


class TestColumnDescriptor:
    """Test ColumnDescriptor."""

    def test_to_dict(self):
        """Test the serialised form uses the camelCase column name key."""
        column = ColumnDescriptor(ColumnType.VARCHAR, length=80, column_name="email")

        assert column.to_dict() == {
            "type": "varchar",
            "length": 80,
            "precision": None,
            "columnName": "email",
        }

    @pytest.mark.parametrize(
        "column, expected",
        [
            (ColumnDescriptor(ColumnType.VARCHAR, length=100), "VARCHAR(100)"),
            (ColumnDescriptor(ColumnType.VARCHAR), "VARCHAR(255)"),
            (ColumnDescriptor(ColumnType.TEXT), "TEXT"),
            (ColumnDescriptor(ColumnType.INT), "INT"),
            (ColumnDescriptor(ColumnType.FLOAT, precision=4), "FLOAT(4)"),
            (ColumnDescriptor(ColumnType.FLOAT), "FLOAT(2)"),
            (ColumnDescriptor(ColumnType.DECIMAL, precision=3), "DECIMAL(10,3)"),
            (ColumnDescriptor(ColumnType.DECIMAL), "DECIMAL(10,2)"),
            (ColumnDescriptor(ColumnType.DATE), "DATE"),
            (ColumnDescriptor(ColumnType.JSON), "JSON"),
        ],
    )
    def test_sql_definition(self, column, expected):
        """Test the generic SQL definition of each type."""
        assert column.sql_definition() == expected

    def test_descriptor_is_immutable(self):
        """Test that descriptors cannot be modified."""
        column = ColumnDescriptor(ColumnType.INT)

        with pytest.raises(AttributeError):
            column.type = ColumnType.TEXT

    def test_type_predicates(self):
        """Test numeric and textual helpers."""
        assert ColumnDescriptor(ColumnType.DECIMAL).is_numeric()
        assert not ColumnDescriptor(ColumnType.DATE).is_numeric()
        assert ColumnDescriptor(ColumnType.TEXT).is_textual()
        assert not ColumnDescriptor(ColumnType.JSON).is_textual()

    def test_can_accept(self):
        """Test rank based compatibility."""
        varchar = ColumnDescriptor(ColumnType.VARCHAR)

        assert varchar.can_accept(ColumnType.INT)
        assert varchar.can_accept(ColumnType.VARCHAR)
        assert not varchar.can_accept(ColumnType.JSON)
