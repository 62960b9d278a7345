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
"""Template loading and column helpers shared by the code generators."""

import json
import logging
from pathlib import Path
from string import Template
from typing import Any, Mapping, Optional

from schematools.exceptions import GenerationException

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
TIMESTAMP_COLUMNS = ("created_at", "updated_at")


def load_template(name: str, template_dir: Optional[Path] = None) -> Template:
    """
    Load a template file from the template directory.

    Raises:
        GenerationException: If the template file does not exist
    """
    template_path = Path(template_dir or TEMPLATE_DIR) / name
    if not template_path.is_file():
        raise GenerationException(
            f"Template file not found: {template_path}",
            operation="load_template",
        )
    logger.debug(f"Loading template {template_path}")
    return Template(template_path.read_text(encoding="utf-8"))


def string_literal(value: str) -> str:
    """Double-quoted Python string literal."""
    return json.dumps(value)


def timestamp_columns(schema: Mapping[str, Any], enabled: bool = True) -> list[str]:
    """Generated timestamp columns, minus any the inferred schema already has."""
    if not enabled:
        return []
    return [name for name in TIMESTAMP_COLUMNS if name not in schema]
