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
"""Type inference: per-value classification and per-column reconciliation."""

from schematools.inference.classifier import (
    ElementType,
    classify_element,
    is_date_string,
    is_monetary_column,
)
from schematools.inference.reconciler import (
    analyze_data_structure,
    discover_columns,
    reconcile_column,
)

__all__ = [
    "ElementType",
    "classify_element",
    "is_date_string",
    "is_monetary_column",
    "analyze_data_structure",
    "discover_columns",
    "reconcile_column",
]
