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
MySQL Database Connector
Implementation of the DatabaseConnector interface for MySQL/MariaDB databases.
"""

import logging

import pymysql.cursors

from schematools.connectors.database.generic import DatabaseConnector
from schematools.config import DatabaseConfig
from schematools.exceptions import ConnectionException, LoadException

logger = logging.getLogger(__name__)


class MySQLConnector(DatabaseConnector):
    """MySQL implementation of the DatabaseConnector interface."""

    dialect = "mysql"

    def _open(self, config: DatabaseConfig):
        return pymysql.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
            charset=config.charset,
            cursorclass=pymysql.cursors.DictCursor,
        )

    def connect(self, config: DatabaseConfig) -> None:
        """Establish connection to MySQL database."""
        self.config = config
        try:
            self.connection = self._open(config)
        except pymysql.Error as e:
            raise ConnectionException(
                f"MySQL connection failed: {e}",
                operation="connect",
                details={"host": config.host, "database": config.database},
            ) from e

    def disconnect(self) -> None:
        """Close the database connection."""
        if self.connection:
            self.connection.close()
            self.connection = None

    def is_table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the database."""
        if not self.config:
            return False

        with self.connection.cursor() as cursor:
            cursor.execute(
                "SELECT COUNT(*) FROM information_schema.tables "
                "WHERE table_schema = %s AND table_name = %s",
                (self.config.database, table_name)
            )
            result = cursor.fetchone()
            return result["COUNT(*)"] > 0 if result else False

    def execute(self, statement: str) -> None:
        """Execute a DDL statement."""
        logger.debug(f"Running SQL: {statement}")
        try:
            with self.connection.cursor() as cursor:
                cursor.execute(statement)
            self.connection.commit()
        except pymysql.Error as e:
            raise LoadException(
                f"MySQL statement failed: {e}",
                operation="execute",
                details={"statement": statement},
            ) from e

    def test_connection(self) -> bool:
        """Test connectivity to the configured MySQL server."""
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
        except pymysql.Error as e:
            raise ConnectionException(
                f"MySQL connection test failed: {e}",
                operation="test_connection",
                details={"host": self.config.host, "port": self.config.port},
            ) from e

        logger.info(f"MySQL connection test successful: {self.config.host}")
        return True
