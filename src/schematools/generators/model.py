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
Model Generator Module
Renders a SQLAlchemy declarative model class for the inferred table
"""

import logging
from pathlib import Path
from typing import Optional

from schematools.generators.base import load_template, string_literal, timestamp_columns
from schematools.naming import normalize_identifier
from schematools.schema import (
    DECIMAL_DIGITS,
    DEFAULT_PRECISION,
    ColumnDescriptor,
    TableSchema,
)

logger = logging.getLogger(__name__)

MODEL_TEMPLATE = "model.py.tmpl"
PRIMARY_KEY = "id"

PYTHON_TYPES = {
    "int": "int",
    "float": "float",
    "decimal": "Decimal",
    "date": "date",
    "json": "Any",
    "varchar": "str",
    "text": "str",
}

TYPE_IMPORTS = {
    "Decimal": ("decimal", "Decimal"),
    "date": ("datetime", "date"),
    "datetime": ("datetime", "datetime"),
    "Any": ("typing", "Any"),
    "Optional": ("typing", "Optional"),
}


def python_type(column: ColumnDescriptor) -> str:
    return PYTHON_TYPES.get(column.type.value, "str")


def column_type(column: ColumnDescriptor) -> str:
    """SQLAlchemy column type expression, imported from ``sqlalchemy``."""
    if column.type.value == "varchar":
        return f"String({column.length})" if column.length else "String"
    if column.type.value == "decimal":
        return f"Numeric({DECIMAL_DIGITS}, {column.precision or DEFAULT_PRECISION})"
    types = {
        "text": "Text",
        "int": "Integer",
        "float": "Float",
        "date": "Date",
        "json": "JSON",
    }
    return types.get(column.type.value, "String")


class ModelGenerator:
    """Generates SQLAlchemy model modules from an inferred table schema."""

    def __init__(self, timestamps: bool = True, template_dir: Optional[Path] = None):
        self.timestamps = timestamps
        self.template_dir = template_dir

    def generate_model(
        self,
        model_name: str,
        schema: TableSchema,
        table_name: Optional[str] = None,
    ) -> str:
        """
        Generate the source of a SQLAlchemy model module.

        A column named ``id`` becomes the primary key; otherwise an integer
        surrogate ``id`` is added.

        Args:
            model_name: Class name of the model
            schema: Mapping of column name to ColumnDescriptor
            table_name: Table name, defaults to the lower-cased model name plus "s"

        Returns:
            Python source of the model module
        """
        template = load_template(MODEL_TEMPLATE, self.template_dir)
        table_name = table_name or f"{model_name.lower()}s"

        logger.debug(f"Generating model '{model_name}' for table '{table_name}'")

        attributes = self._attribute_names(schema)
        lines: list[str] = []
        sa_types: set[str] = set()
        py_types: set[str] = {"Optional"}

        if PRIMARY_KEY not in schema:
            lines.append(f"    {PRIMARY_KEY}: Mapped[int] = mapped_column(Integer, primary_key=True)")
            sa_types.add("Integer")

        for name, column in schema.items():
            sa_type = column_type(column)
            py_type = python_type(column)
            sa_types.add(sa_type.split("(")[0])
            py_types.add(py_type)

            args = [sa_type]
            if attributes[name] != name:
                args.insert(0, string_literal(name))
            if name == PRIMARY_KEY:
                args.append("primary_key=True")
                annotation = f"Mapped[{py_type}]"
            else:
                args.append("nullable=True")
                annotation = f"Mapped[Optional[{py_type}]]"
            lines.append(f"    {attributes[name]}: {annotation} = mapped_column({', '.join(args)})")

        for name in timestamp_columns(schema, self.timestamps):
            sa_types.add("DateTime")
            py_types.add("datetime")
            lines.append(
                f"    {name}: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)"
            )

        return template.substitute(
            model_name=model_name,
            table_literal=string_literal(table_name),
            imports=self.generate_imports(py_types, sa_types),
            class_doc=self.generate_class_documentation(schema, attributes),
            columns="\n".join(lines),
        )

    def _attribute_names(self, schema: TableSchema) -> dict[str, str]:
        """Map column names to unique Python attribute names."""
        taken = set() if PRIMARY_KEY in schema else {PRIMARY_KEY}
        taken.update(timestamp_columns(schema, self.timestamps))
        attributes: dict[str, str] = {}
        for name in schema:
            candidate = PRIMARY_KEY if name == PRIMARY_KEY else normalize_identifier(name)
            attribute = candidate
            suffix = 2
            while attribute in taken:
                attribute = f"{candidate}_{suffix}"
                suffix += 1
            taken.add(attribute)
            attributes[name] = attribute
        return attributes

    def generate_imports(self, py_types: set[str], sa_types: set[str]) -> str:
        stdlib: dict[str, set[str]] = {}
        for py_type in py_types:
            if py_type in TYPE_IMPORTS:
                module, name = TYPE_IMPORTS[py_type]
                stdlib.setdefault(module, set()).add(name)

        lines = [
            f"from {module} import {', '.join(sorted(names))}"
            for module, names in sorted(stdlib.items())
        ]
        lines.append("")
        if sa_types:
            lines.append(f"from sqlalchemy import {', '.join(sorted(sa_types))}")
        lines.append("from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column")
        return "\n".join(lines)

    def generate_class_documentation(
        self, schema: TableSchema, attributes: dict[str, str]
    ) -> str:
        if not schema:
            return "    No columns were inferred from the sample data."

        docs = ["    Columns inferred from sample data:", ""]
        for name, column in schema.items():
            docs.append(
                f"    {attributes[name]} ({python_type(column)}): {column.sql_definition()}"
            )
        return "\n".join(docs)
