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
"""Naming helpers for tables, models and model attributes."""

import keyword
import re
from pathlib import Path


def normalize_identifier(name: str) -> str:
    """
    Normalize a column name into a Python identifier.

    Rules:
    - camelCase becomes snake_case
    - Lowercase, only [a-z0-9_]
    - Collapse multiple underscores
    - Must start with a letter or underscore
    - Python keywords get a trailing underscore
    """
    name = re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name.strip()).lower()
    name = re.sub(r"[^a-z0-9_]", "_", name)
    name = re.sub(r"_+", "_", name)

    if not name:
        return "column"
    if not re.match(r"[a-z_]", name[0]):
        name = f"_{name}"
    if keyword.iskeyword(name):
        name = f"{name}_"

    return name


def table_name_from_path(path: str) -> str:
    """Default table name for a sample file: its lower-cased stem."""
    return Path(path).stem.lower().replace("-", "_")


def model_name_from_table(table_name: str) -> str:
    """Convert a snake_case table name to a PascalCase model name."""
    return "".join(part.capitalize() for part in table_name.split("_") if part)
