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
"""JSON file connector implementation."""

import json
import logging
from collections.abc import Mapping
from typing import Any, Generator, Optional

from schematools.config import FileItemConfig
from schematools.connectors.file.base import DEFAULT_BATCH_SIZE, FileConnector
from schematools.connectors.file.utils import get_file_handle
from schematools.exceptions import InvalidInputException

logger = logging.getLogger(__name__)


class JSONConnector(FileConnector):
    """
    JSON file connector.

    Supports both JSON array format and JSON Lines format. Values keep their
    parsed JSON types so inference can tell numbers, booleans and nested
    documents apart. Supports both local files and HTTP/HTTPS URLs.
    """

    def __init__(self, config: FileItemConfig):
        """
        Initialize JSON connector.

        Args:
            config: FileItemConfig with JSON-specific options:
                - format: "array" (default) or "jsonl"
        """
        super().__init__(config)

        # JSON format: "array" (default) or "jsonl" (JSON Lines)
        self.json_format = self.config.options.get("format", "array")

    def read_records(
        self, batch_size: Optional[int] = None
    ) -> Generator[list[Any], None, None]:
        """
        Read rows from the JSON file.

        Yields:
            Batches of rows
        """
        path = self.get_effective_path()
        batch_size = batch_size or DEFAULT_BATCH_SIZE

        logger.info(f"Reading JSON file: {path} (format: {self.json_format})")

        with get_file_handle(path) as file_path:
            if self.json_format == "jsonl":
                rows = self._read_lines(file_path, path)
            else:
                rows = self._read_array(file_path, path)

            batch: list[Any] = []
            row_count = 0
            for row in rows:
                batch.append(row)
                row_count += 1

                if len(batch) >= batch_size:
                    logger.debug(f"Yielding batch of {len(batch)} records")
                    yield batch
                    batch = []

            # Yield remaining records
            if batch:
                logger.debug(f"Yielding final batch of {len(batch)} records")
                yield batch

            logger.info(f"Read {row_count} records from JSON file")

    def _read_lines(self, file_path, path: str) -> Generator[Any, None, None]:
        """JSON Lines format - one JSON document per line."""
        with open(file_path, "r", encoding="utf-8") as f:
            line_number = 0
            try:
                for line_number, line in enumerate(f, start=1):
                    line = line.strip()
                    if line:
                        yield json.loads(line)
            except json.JSONDecodeError as e:
                logger.error(f"Error parsing JSON line {line_number}: {e}")
                raise InvalidInputException(
                    f"Invalid JSON on line {line_number}: {e.msg}",
                    source=path,
                    operation="read",
                ) from e
            except UnicodeDecodeError as e:
                logger.error(f"Error decoding JSON Lines file: {e}")
                raise InvalidInputException(
                    f"Invalid JSON: file is not valid UTF-8 ({e.reason})",
                    source=path,
                    operation="read",
                ) from e

    def _read_array(self, file_path, path: str) -> list[Any]:
        """Array format - entire file is a JSON array, or a single object."""
        with open(file_path, "r", encoding="utf-8") as f:
            try:
                data = json.load(f)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                logger.error(f"Error parsing JSON file: {e}")
                raise InvalidInputException(
                    f"Invalid JSON: {e}", source=path, operation="read"
                ) from e

        if isinstance(data, Mapping):
            return [data]
        if not isinstance(data, list):
            raise InvalidInputException(
                f"Expected JSON array or object, got {type(data).__name__}",
                source=path,
                operation="read",
            )
        return data
