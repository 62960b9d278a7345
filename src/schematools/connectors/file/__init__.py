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
"""File connectors that read sample JSON/CSV documents."""

from pathlib import Path
from typing import Any, Dict, Optional

from schematools.config import FileItemConfig
from schematools.connectors.file.base import FileConnector
from schematools.connectors.file.csv_connector import CSVConnector
from schematools.connectors.file.json_connector import JSONConnector
from schematools.exceptions import InvalidInputException


def get_file_connector(
    path: str, options: Optional[Dict[str, Any]] = None
) -> FileConnector:
    """Create the connector matching the file extension of ``path``."""
    options = dict(options or {})
    suffix = Path(path).suffix.lower()

    if suffix == ".csv":
        return CSVConnector(FileItemConfig.from_path(path, options))
    if suffix == ".jsonl":
        options.setdefault("format", "jsonl")
        return JSONConnector(FileItemConfig.from_path(path, options))
    if suffix == ".json":
        return JSONConnector(FileItemConfig.from_path(path, options))

    raise InvalidInputException(
        f"Unsupported file type: {suffix or '(none)'}", source=path, operation="read"
    )


__all__ = ["CSVConnector", "FileConnector", "JSONConnector", "get_file_connector"]
