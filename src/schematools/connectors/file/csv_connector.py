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
"""CSV file connector implementation."""

import csv
import logging
from typing import Generator, List, Optional

from schematools.config import FileItemConfig
from schematools.connectors.file.base import DEFAULT_BATCH_SIZE, FileConnector, Record
from schematools.connectors.file.utils import get_file_handle
from schematools.exceptions import InvalidInputException

logger = logging.getLogger(__name__)


class CSVConnector(FileConnector):
    """
    CSV file connector.

    Every value arrives as a string; numeric text is recovered as int/float
    during inference. Supports both local files and HTTP/HTTPS URLs.
    """

    def __init__(self, config: FileItemConfig):
        """
        Initialize CSV connector.

        Args:
            config: FileItemConfig with CSV-specific options:
                - delimiter: Field delimiter (default: ',')
                - quotechar: Quote character (default: '"')
                - header: Comma-separated header string if file has no header
        """
        super().__init__(config)

        # Extract CSV-specific options
        self.delimiter = self.config.options.get("delimiter", ",")
        self.quotechar = self.config.options.get("quotechar", '"')
        self.header = self.config.options.get("header")

        # Parse header if provided
        self.header_fields: Optional[List[str]] = None
        if self.header:
            self.header_fields = [field.strip() for field in self.header.split(",")]

    def read_records(
        self, batch_size: Optional[int] = None
    ) -> Generator[list[Record], None, None]:
        """
        Read rows from the CSV file, using the first row as the header
        unless a header option was configured.

        Yields:
            Batches of records
        """
        path = self.get_effective_path()
        batch_size = batch_size or DEFAULT_BATCH_SIZE

        logger.info(f"Reading CSV file: {path}")

        with get_file_handle(path) as file_path:
            with open(file_path, "r", newline="", encoding="utf-8") as csvfile:
                reader = csv.DictReader(
                    csvfile,
                    fieldnames=self.header_fields,
                    delimiter=self.delimiter,
                    quotechar=self.quotechar,
                )

                batch: list[Record] = []
                row_count = 0

                try:
                    for row in reader:
                        # Surplus cells without a header are collected under None
                        record: Record = {
                            key: (value if value != "" else None)
                            for key, value in row.items()
                            if key is not None
                        }
                        batch.append(record)
                        row_count += 1

                        if len(batch) >= batch_size:
                            logger.debug(f"Yielding batch of {len(batch)} records")
                            yield batch
                            batch = []
                except (csv.Error, UnicodeDecodeError) as e:
                    raise InvalidInputException(
                        f"Invalid CSV at line {reader.line_num}: {e}",
                        source=path,
                        operation="read",
                    ) from e

                # Yield remaining records
                if batch:
                    logger.debug(f"Yielding final batch of {len(batch)} records")
                    yield batch

                logger.info(f"Read {row_count} records from CSV file")
