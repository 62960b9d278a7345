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
"""Base file connector implementation."""

import logging
from abc import ABC, abstractmethod
from itertools import islice
from typing import Any, Dict, Generator, Optional

from schematools.config import FileItemConfig, InferenceConfig
from schematools.inference import analyze_data_structure
from schematools.schema import TableSchema

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

DEFAULT_BATCH_SIZE = 50000


class FileConnector(ABC):
    """
    Abstract base class for sample file readers.

    Subclasses parse a JSON or CSV document into rows of column name to
    value mappings; the base class feeds those rows into type inference.
    """

    def __init__(self, config: FileItemConfig):
        """
        Initialize the file connector with configuration.

        Args:
            config: FileItemConfig instance with file-specific settings
        """
        self.config = config

    @abstractmethod
    def read_records(
        self, batch_size: Optional[int] = None
    ) -> Generator[list[Any], None, None]:
        """
        Read sample rows from the file.

        Args:
            batch_size: Maximum number of rows per yielded batch

        Yields:
            Batches of rows
        """
        pass

    def get_effective_path(self) -> str:
        """Get the configured local path or URL."""
        if self.config.file_path:
            return self.config.file_path
        elif self.config.http_path:
            return self.config.http_path
        else:
            raise ValueError("No path specified")

    def read_all(self, sample_size: Optional[int] = None) -> list[Any]:
        """Read every row, or only the first ``sample_size`` rows."""
        rows = (
            row
            for batch in self.read_records()
            for row in batch
        )
        if sample_size is not None:
            return list(islice(rows, sample_size))
        return list(rows)

    def infer_schema(self, config: Optional[InferenceConfig] = None) -> TableSchema:
        """
        Infer the table schema of the file's sample rows.

        Args:
            config: Inference policy, including the optional sample size

        Returns:
            Mapping of column name to ColumnDescriptor
        """
        config = config or InferenceConfig()
        rows = self.read_all(config.sample_size)
        logger.info(
            f"Analyzing {len(rows)} rows from '{self.get_effective_path()}'"
        )
        return analyze_data_structure(rows, config)
