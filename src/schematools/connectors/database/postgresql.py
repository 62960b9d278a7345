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
PostgreSQL Database Connector
Implementation of the DatabaseConnector interface for PostgreSQL databases.
"""

import logging
from typing import Optional

import psycopg2

from schematools.connectors.database.generic import DatabaseConnector
from schematools.config import DatabaseConfig
from schematools.exceptions import ConnectionException, LoadException

logger = logging.getLogger(__name__)


class PostgreSQLConnector(DatabaseConnector):
    """PostgreSQL implementation of the DatabaseConnector interface."""

    dialect = "postgresql"

    def _open(self, config: DatabaseConfig):
        return psycopg2.connect(
            dbname=config.database,
            user=config.user,
            password=config.password,
            host=config.host,
            port=config.port,
        )

    def connect(self, config: DatabaseConfig) -> None:
        """Establish connection to PostgreSQL database."""
        self.config = config
        try:
            self.connection = self._open(config)
        except psycopg2.Error as e:
            raise ConnectionException(
                f"PostgreSQL connection failed: {e}",
                operation="connect",
                details={"host": config.host, "database": config.database},
            ) from e

    def disconnect(self) -> None:
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    @property
    def schema_name(self) -> Optional[str]:
        if not self.config:
            return None
        return self.config.schema or "public"

    def is_table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the database."""
        if not self.config:
            return False

        with self.connection.cursor() as cursor:
            cursor.execute(
                "SELECT EXISTS (SELECT FROM information_schema.tables "
                "WHERE table_name=%s AND table_schema=%s)",
                (table_name, self.schema_name)
            )
            result = cursor.fetchone()
            return result[0] if result else False

    def execute(self, statement: str) -> None:
        """Execute a DDL statement."""
        logger.debug(f"Running SQL: {statement}")
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(statement)
            self.connection.commit()
        except psycopg2.Error as e:
            self.connection.rollback()
            raise LoadException(
                f"PostgreSQL statement failed: {e}",
                operation="execute",
                details={"statement": statement},
            ) from e

    def test_connection(self) -> bool:
        """Test connectivity to the configured PostgreSQL server."""
        if not self.config:
            raise ConnectionException(
                "No database configuration provided", operation="test_connection"
            )

        try:
            connection = self._open(self.config)
            try:
                with connection.cursor() as cursor:
                    cursor.execute("SELECT 1")
                    cursor.fetchone()
            finally:
                connection.close()
        except psycopg2.Error as e:
            raise ConnectionException(
                f"PostgreSQL connection test failed: {e}",
                operation="test_connection",
                details={"host": self.config.host, "port": self.config.port},
            ) from e

        logger.info(f"PostgreSQL connection test successful: {self.config.host}")
        return True
