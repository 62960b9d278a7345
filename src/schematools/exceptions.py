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
"""Custom exceptions for the schema tools."""

from typing import Optional, Any, Dict


class SchemaToolsException(Exception):
    """Base exception for all schema tools errors."""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        column: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.source = source
        self.column = column
        self.operation = operation
        self.details = details or {}

        # Build context message
        context_parts = []
        if source:
            context_parts.append(f"source={source}")
        if column:
            context_parts.append(f"column={column}")
        if operation:
            context_parts.append(f"operation={operation}")

        if context_parts:
            context_str = f"[{', '.join(context_parts)}] "
        else:
            context_str = ""

        super().__init__(f"{context_str}{message}")


class InvalidInputException(SchemaToolsException):
    """Raised when a sample document is missing or cannot be parsed."""
    pass


class GenerationException(SchemaToolsException):
    """Raised when an artifact (SQL, migration, model) cannot be generated."""
    pass


class ConfigurationException(SchemaToolsException):
    """Raised when configuration is invalid or missing."""
    pass


class ConnectionException(SchemaToolsException):
    """Raised when database connection fails."""
    pass


class LoadException(SchemaToolsException):
    """Raised when an inferred schema cannot be applied to a database."""
    pass


class ConversionException(SchemaToolsException):
    """Raised when an environment/settings file conversion fails."""
    pass
