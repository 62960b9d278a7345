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
Unit tests for naming helpers.
"""

import pytest

from schematools.naming import model_name_from_table, normalize_identifier, table_name_from_path


class TestNormalizeIdentifier:
    """Test column name to attribute name conversion."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("email", "email"),
            ("orderTotal", "order_total"),
            ("Created On", "created_on"),
            ("  unit-price ", "unit_price"),
            ("a__b", "a_b"),
            ("2fa_enabled", "_2fa_enabled"),
            ("class", "class_"),
            ("", "column"),
        ],
    )
    def test_normalize_identifier(self, name, expected):
        """Test the normalisation rules."""
        assert normalize_identifier(name) == expected


class TestTableAndModelNames:
    """Test default table and model names."""

    def test_table_name_from_path(self):
        """Test that the file stem is lower-cased and dashes become underscores."""
        assert table_name_from_path("/data/Order-Items.csv") == "order_items"
        assert table_name_from_path("users.json") == "users"
        assert table_name_from_path("https://example.com/exports/daily_sales.jsonl") == "daily_sales"

    def test_model_name_from_table(self):
        """Test snake_case to PascalCase."""
        assert model_name_from_table("order_items") == "OrderItems"
        assert model_name_from_table("users") == "Users"
        assert model_name_from_table("_odd__name_") == "OddName"
