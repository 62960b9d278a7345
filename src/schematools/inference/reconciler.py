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
Column type reconciliation
Folds the per-value classifications of a column into one ColumnDescriptor.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, replace
from functools import partial, reduce
from typing import Any, Iterable, Iterator, Optional, Sequence

from schematools.config import InferenceConfig
from schematools.inference.classifier import (
    MIN_PRECISION,
    ElementType,
    classify_element,
    fractional_precision,
    is_numeric_text,
)
from schematools.schema import TYPE_HIERARCHY, ColumnDescriptor, ColumnType, TableSchema

logger = logging.getLogger(__name__)

FLAT_COLUMN_NAME = "data"

_NUMERIC = (ColumnType.INT, ColumnType.FLOAT)


@dataclass(frozen=True)
class _ColumnState:
    """Running result of folding a column's values."""

    best_type: ColumnType = ColumnType.INT
    max_length: int = 0
    max_precision: int = 0
    seen: int = 0


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def _column_values(rows: Iterable[Any], column_name: Optional[str]) -> Iterator[Any]:
    for row in rows:
        if column_name is None:
            value = row
        elif isinstance(row, Mapping):
            value = row.get(column_name)
        else:
            value = None
        if not _is_empty(value):
            yield value


def reinterpret_numeric_text(element: ElementType, value: Any) -> ElementType:
    """CSV values arrive as strings; recover int/float from numeric text."""
    if element.type is not ColumnType.VARCHAR or not is_numeric_text(value):
        return element
    text = value.strip()
    if "." in text:
        return replace(element, type=ColumnType.FLOAT, precision=fractional_precision(text))
    return replace(element, type=ColumnType.INT)


def _promote(
    state: _ColumnState, element: ElementType, config: InferenceConfig
) -> _ColumnState:
    previous = state.best_type
    current = element.type
    max_length = max(state.max_length, element.length or 0)
    max_precision = max(state.max_precision, element.precision or 0)

    if state.seen == 0:
        return _ColumnState(current, max_length, max_precision, 1)

    best = current if TYPE_HIERARCHY[current] > TYPE_HIERARCHY[previous] else previous

    # Forced promotions look at the type held before this value.
    if previous is ColumnType.INT and current is ColumnType.FLOAT:
        best = ColumnType.FLOAT
    if previous in _NUMERIC and current is ColumnType.DECIMAL:
        best = ColumnType.DECIMAL
    if previous in _NUMERIC and current is ColumnType.DATE:
        best = ColumnType.VARCHAR
        max_length = max(max_length, config.date_length)
    if previous is ColumnType.DATE and current is ColumnType.VARCHAR:
        best = ColumnType.VARCHAR
        max_length = max(max_length, config.date_length)

    return _ColumnState(
        best_type=best,
        max_length=max_length,
        max_precision=max_precision,
        seen=state.seen + 1,
    )


def _fold_value(
    state: _ColumnState, value: Any, column_name: Optional[str], config: InferenceConfig
) -> _ColumnState:
    element = reinterpret_numeric_text(classify_element(value, column_name), value)
    return _promote(state, element, config)


def _finalize(
    state: _ColumnState, column_name: Optional[str], config: InferenceConfig
) -> ColumnDescriptor:
    if state.seen == 0:
        return ColumnDescriptor(
            ColumnType.VARCHAR, length=config.empty_column_length, column_name=column_name
        )

    best = state.best_type
    if best is ColumnType.VARCHAR:
        length = max(
            min(state.max_length, config.max_varchar_length), config.min_varchar_length
        )
        return ColumnDescriptor(best, length=length, column_name=column_name)
    if best in (ColumnType.FLOAT, ColumnType.DECIMAL):
        precision = max(state.max_precision, MIN_PRECISION)
        return ColumnDescriptor(best, precision=precision, column_name=column_name)
    return ColumnDescriptor(best, column_name=column_name)


def reconcile_column(
    rows: Sequence[Any],
    column_name: Optional[str] = None,
    config: Optional[InferenceConfig] = None,
) -> ColumnDescriptor:
    """
    Determine the single most compatible column type for a set of sample rows.

    Args:
        rows: Sample rows, each a mapping of column name to value. When
            ``column_name`` is None each row is itself the value.
        column_name: Column to reconcile; also feeds the monetary-name heuristic
        config: Policy constants, defaults to ``InferenceConfig()``

    Returns:
        An immutable ColumnDescriptor
    """
    config = config or InferenceConfig()

    step = partial(_fold_value, column_name=column_name, config=config)
    state = reduce(step, _column_values(rows, column_name), _ColumnState())
    descriptor = _finalize(state, column_name, config)

    logger.debug(
        f"Column '{column_name}': {descriptor.type.value} "
        f"(values={state.seen}, length={descriptor.length}, precision={descriptor.precision})"
    )
    return descriptor


def discover_columns(rows: Iterable[Any]) -> list[str]:
    """Union of keys across all mapping rows, in first-seen order."""
    columns: dict[str, None] = {}
    for row in rows:
        if isinstance(row, Mapping):
            for key in row:
                columns.setdefault(key, None)
    return list(columns)


def analyze_data_structure(
    data: Any, config: Optional[InferenceConfig] = None
) -> TableSchema:
    """
    Infer a table schema from parsed sample data.

    A single mapping is treated as one row; a sequence of mappings yields one
    column per distinct key; a flat sequence of scalars yields a single
    column named ``data``.
    """
    if not data:
        return {}

    rows = [data] if isinstance(data, Mapping) else list(data)

    if any(isinstance(row, Mapping) for row in rows):
        return {
            column: reconcile_column(rows, column, config)
            for column in discover_columns(rows)
        }

    descriptor = reconcile_column(rows, None, config)
    return {FLAT_COLUMN_NAME: replace(descriptor, column_name=FLAT_COLUMN_NAME)}
