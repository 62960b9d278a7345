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
Migration Generator Module
Renders an Alembic migration that creates the inferred table
"""

import logging
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from schematools.generators.base import load_template, string_literal, timestamp_columns
from schematools.schema import (
    DECIMAL_DIGITS,
    DEFAULT_PRECISION,
    ColumnDescriptor,
    TableSchema,
)

logger = logging.getLogger(__name__)

MIGRATION_TEMPLATE = "migration.py.tmpl"
COLUMN_INDENT = " " * 8


def sqlalchemy_type(column: ColumnDescriptor) -> str:
    """SQLAlchemy type expression for a column, using the ``sa`` alias."""
    types = {
        "varchar": f"sa.String(length={column.length})" if column.length else "sa.String()",
        "text": "sa.Text()",
        "int": "sa.Integer()",
        "float": "sa.Float()",
        "decimal": (
            f"sa.Numeric(precision={DECIMAL_DIGITS}, "
            f"scale={column.precision or DEFAULT_PRECISION})"
        ),
        "date": "sa.Date()",
        "json": "sa.JSON()",
    }
    return types.get(column.type.value, "sa.String()")


class MigrationGenerator:
    """Generates Alembic migration modules from an inferred table schema."""

    def __init__(self, timestamps: bool = True, template_dir: Optional[Path] = None):
        self.timestamps = timestamps
        self.template_dir = template_dir

    def generate_migration(
        self,
        table_name: str,
        schema: TableSchema,
        revision: Optional[str] = None,
        create_date: Optional[datetime] = None,
    ) -> str:
        """
        Generate the source of an Alembic migration module.

        Args:
            table_name: Name of the table to create
            schema: Mapping of column name to ColumnDescriptor
            revision: Alembic revision id, generated when omitted
            create_date: Timestamp recorded in the module docstring

        Returns:
            Python source of the migration
        """
        template = load_template(MIGRATION_TEMPLATE, self.template_dir)
        revision = revision or uuid.uuid4().hex[:12]
        create_date = create_date or datetime.now()

        logger.debug(f"Generating migration {revision} for table '{table_name}'")

        return template.substitute(
            table_name=table_name,
            table_literal=string_literal(table_name),
            revision=revision,
            revision_literal=string_literal(revision),
            create_date=create_date.isoformat(sep=" ", timespec="seconds"),
            columns=self.generate_columns(schema),
        )

    def generate_columns(self, schema: TableSchema) -> str:
        columns = [
            f"{COLUMN_INDENT}sa.Column({string_literal(name)}, "
            f"{sqlalchemy_type(column)}, nullable=True),"
            for name, column in schema.items()
        ]
        for name in timestamp_columns(schema, self.timestamps):
            columns.append(
                f"{COLUMN_INDENT}sa.Column({string_literal(name)}, sa.DateTime(), nullable=True),"
            )
        return "\n".join(columns)
