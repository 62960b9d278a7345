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
Generic Database Connector Interface
Applies an inferred table schema to a live database.
"""

from abc import ABC, abstractmethod
import logging
from typing import Any, Optional

from schematools.config import DatabaseConfig
from schematools.exceptions import ConnectionException, LoadException
from schematools.generators.sql import SqlGenerator
from schematools.schema import TableSchema

logger = logging.getLogger(__name__)


class DatabaseConnector(ABC):
    """
    Base class for database connectors.

    Subclasses provide connection management and catalog lookups; the DDL
    itself comes from SqlGenerator for the connector's dialect.
    """

    dialect: str = ""

    def __init__(self):
        """Initialize the database connector."""
        self.connection: Any = None
        self.config: Optional[DatabaseConfig] = None

    @abstractmethod
    def connect(self, config: DatabaseConfig) -> None:
        """
        Establish connection to the database.

        Args:
            config: Database configuration containing connection parameters
        """
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Close the database connection."""
        pass

    @abstractmethod
    def is_table_exists(self, table_name: str) -> bool:
        """
        Check if a table exists in the database.

        Args:
            table_name: Name of the table to check

        Returns:
            True if table exists, False otherwise
        """
        pass

    @abstractmethod
    def execute(self, statement: str) -> None:
        """Execute a single DDL statement and commit."""
        pass

    @abstractmethod
    def test_connection(self) -> bool:
        """
        Test connectivity with a throwaway connection.

        Raises:
            ConnectionException: If the database cannot be reached
        """
        pass

    @property
    def schema_name(self) -> Optional[str]:
        """Database schema qualifying table names, if any."""
        return None

    def create_table(
        self,
        table_name: str,
        schema: TableSchema,
        replace: bool = False,
        timestamps: bool = True,
    ) -> str:
        """
        Create a table with the specified inferred schema.

        Args:
            table_name: Name of the table to create
            schema: Mapping of column name to ColumnDescriptor
            replace: Drop an existing table of the same name first
            timestamps: Add created_at/updated_at columns

        Returns:
            The CREATE TABLE statement that was executed

        Raises:
            LoadException: If the table exists and ``replace`` is False
            GenerationException: If no statement can be built; nothing is dropped
        """
        if not self.config or not self.connection:
            raise ConnectionException(
                "Database connection not established", operation="create_table"
            )

        generator = SqlGenerator(timestamps=timestamps)
        reference = generator.table_reference(table_name, self.dialect, self.schema_name)
        # Must precede the DROP.
        statement = generator.generate(table_name, schema, self.dialect, self.schema_name)

        if self.is_table_exists(table_name):
            if not replace:
                raise LoadException(
                    f"Table {reference} already exists (use replace to recreate it)",
                    source=table_name,
                    operation="create_table",
                )
            logger.info(f"Dropping existing table {reference}")
            self.execute(f"DROP TABLE {reference}")

        logger.debug(f"Creating table {reference}: {statement}")
        self.execute(statement)
        logger.info(f"Table {reference} created with {len(schema)} inferred columns")
        return statement
