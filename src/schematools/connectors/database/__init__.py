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
"""Database connectors used to apply an inferred schema."""

from schematools.config import DatabaseConfig
from schematools.connectors.database.generic import DatabaseConnector
from schematools.connectors.database.mysql import MySQLConnector
from schematools.connectors.database.postgresql import PostgreSQLConnector
from schematools.exceptions import ConfigurationException


def get_database_connector(config: DatabaseConfig) -> DatabaseConnector:
    """Create the connector for ``config.type``."""
    if config.type == "mysql":
        return MySQLConnector()
    if config.type == "postgresql":
        return PostgreSQLConnector()
    raise ConfigurationException(
        f"Unsupported database type '{config.type}'", operation="connect"
    )


__all__ = [
    "DatabaseConnector",
    "MySQLConnector",
    "PostgreSQLConnector",
    "get_database_connector",
]
