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
SQL DDL Generator Module
Renders CREATE TABLE statements for MySQL, SQL Server and PostgreSQL
"""

import logging
from typing import Callable, Dict, Optional

from schematools.exceptions import GenerationException
from schematools.generators.base import timestamp_columns
from schematools.schema import (
    DECIMAL_DIGITS,
    DEFAULT_PRECISION,
    DEFAULT_VARCHAR_LENGTH,
    ColumnDescriptor,
    TableSchema,
)

logger = logging.getLogger(__name__)


def _mysql_type(column: ColumnDescriptor) -> str:
    return column.sql_definition()


def _sqlserver_type(column: ColumnDescriptor) -> str:
    types = {
        "varchar": f"NVARCHAR({column.length or DEFAULT_VARCHAR_LENGTH})",
        "text": "NTEXT",
        "int": "INT",
        "float": "FLOAT",
        "decimal": f"DECIMAL({DECIMAL_DIGITS},{column.precision or DEFAULT_PRECISION})",
        "date": "DATE",
        # SQL Server has no native JSON type in older versions
        "json": "NVARCHAR(MAX)",
    }
    return types.get(column.type.value, f"NVARCHAR({DEFAULT_VARCHAR_LENGTH})")


def _postgresql_type(column: ColumnDescriptor) -> str:
    types = {
        "varchar": f"VARCHAR({column.length or DEFAULT_VARCHAR_LENGTH})",
        "text": "TEXT",
        "int": "INTEGER",
        "float": "REAL",
        "decimal": f"DECIMAL({DECIMAL_DIGITS},{column.precision or DEFAULT_PRECISION})",
        "date": "DATE",
        "json": "JSONB",
    }
    return types.get(column.type.value, f"VARCHAR({DEFAULT_VARCHAR_LENGTH})")


class SqlDialect:
    """Quoting, type mapping and timestamp columns of one SQL dialect."""

    def __init__(
        self,
        name: str,
        quote: Callable[[str], str],
        column_type: Callable[[ColumnDescriptor], str],
        timestamp_type: str,
    ):
        self.name = name
        self.quote = quote
        self.column_type = column_type
        self.timestamp_type = timestamp_type


DIALECTS: Dict[str, SqlDialect] = {
    "mysql": SqlDialect(
        "mysql",
        lambda name: f"`{name}`",
        _mysql_type,
        "TIMESTAMP NULL DEFAULT NULL",
    ),
    "sqlserver": SqlDialect(
        "sqlserver",
        lambda name: f"[{name}]",
        _sqlserver_type,
        "DATETIME2 NULL",
    ),
    "postgresql": SqlDialect(
        "postgresql",
        lambda name: f'"{name}"',
        _postgresql_type,
        "TIMESTAMP NULL",
    ),
}


def get_dialect(name: str) -> SqlDialect:
    """Look up a dialect by name."""
    try:
        return DIALECTS[name.lower()]
    except KeyError as e:
        raise GenerationException(
            f"Unsupported SQL dialect '{name}'",
            operation="generate_sql",
            details={"allowed": sorted(DIALECTS)},
        ) from e


class SqlGenerator:
    """Generates CREATE TABLE statements from an inferred table schema."""

    def __init__(self, timestamps: bool = True):
        self.timestamps = timestamps

    def column_definitions(self, schema: TableSchema, dialect: str) -> list[str]:
        """Quoted ``name TYPE`` definitions for every column."""
        sql_dialect = get_dialect(dialect)
        columns = [
            f"{sql_dialect.quote(name)} {sql_dialect.column_type(column)}"
            for name, column in schema.items()
        ]
        for name in timestamp_columns(schema, self.timestamps):
            columns.append(f"{sql_dialect.quote(name)} {sql_dialect.timestamp_type}")
        return columns

    def generate(
        self,
        table_name: str,
        schema: TableSchema,
        dialect: str = "mysql",
        schema_name: Optional[str] = None,
    ) -> str:
        """
        Generate a CREATE TABLE statement.

        Args:
            table_name: Name of the table to create
            schema: Mapping of column name to ColumnDescriptor
            dialect: One of "mysql", "sqlserver" or "postgresql"
            schema_name: Optional database schema qualifying the table name

        Returns:
            The SQL statement
        """
        sql_dialect = get_dialect(dialect)
        columns = self.column_definitions(schema, dialect)
        if not columns:
            raise GenerationException(
                "Cannot create a table without columns",
                source=table_name,
                operation="generate_sql",
            )
        columns_string = ",\n    ".join(columns)
        logger.debug(f"Generating {sql_dialect.name} DDL for table '{table_name}'")
        return (
            f"CREATE TABLE {self.table_reference(table_name, dialect, schema_name)} (\n"
            f"    {columns_string}\n);"
        )

    def table_reference(
        self, table_name: str, dialect: str, schema_name: Optional[str] = None
    ) -> str:
        """Quoted, optionally schema-qualified table name."""
        sql_dialect = get_dialect(dialect)
        if schema_name:
            return f"{sql_dialect.quote(schema_name)}.{sql_dialect.quote(table_name)}"
        return sql_dialect.quote(table_name)

    def generate_all(
        self, table_name: str, schema: TableSchema, dialects: Optional[list[str]] = None
    ) -> Dict[str, str]:
        """Generate the statement for each dialect, keyed by dialect name."""
        return {
            dialect: self.generate(table_name, schema, dialect)
            for dialect in (dialects or list(DIALECTS))
        }
