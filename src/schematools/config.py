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
import logging
from pathlib import Path
from typing import Any, Dict, Optional
from dataclasses import dataclass, field

import yaml

from schematools.exceptions import ConfigurationException

logger = logging.getLogger(__name__)

SUPPORTED_DIALECTS = ("mysql", "sqlserver", "postgresql")
SUPPORTED_DATABASES = ("mysql", "postgresql")
LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "info"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoggingConfig":
        """Create LoggingConfig from dictionary."""
        level = str(data.get("level", "info")).lower()
        if level not in LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown logging level '{level}'",
                operation="config",
                details={"allowed": list(LOG_LEVELS)},
            )
        return cls(level=level)


@dataclass
class InferenceConfig:
    """Policy constants used when reconciling a column's values."""

    empty_column_length: int = 50
    min_varchar_length: int = 50
    max_varchar_length: int = 255
    date_length: int = 25
    sample_size: Optional[int] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.min_varchar_length > self.max_varchar_length:
            raise ConfigurationException(
                "min_varchar_length cannot exceed max_varchar_length",
                operation="config",
                details={
                    "min_varchar_length": self.min_varchar_length,
                    "max_varchar_length": self.max_varchar_length,
                },
            )
        if self.sample_size is not None and self.sample_size < 1:
            raise ConfigurationException(
                "sample_size must be a positive integer", operation="config"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InferenceConfig":
        """Create InferenceConfig from dictionary."""
        return cls(
            empty_column_length=data.get("empty_column_length", 50),
            min_varchar_length=data.get("min_varchar_length", 50),
            max_varchar_length=data.get("max_varchar_length", 255),
            date_length=data.get("date_length", 25),
            sample_size=data.get("sample_size"),
        )


@dataclass
class OutputConfig:
    """Configuration for generated artifacts."""

    directory: str = "output"
    dialects: list[str] = field(default_factory=lambda: list(SUPPORTED_DIALECTS))
    timestamps: bool = True

    def __post_init__(self):
        """Validate configuration after initialization."""
        unknown = [d for d in self.dialects if d not in SUPPORTED_DIALECTS]
        if unknown:
            raise ConfigurationException(
                f"Unsupported SQL dialect(s): {', '.join(unknown)}",
                operation="config",
                details={"allowed": list(SUPPORTED_DIALECTS)},
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OutputConfig":
        """Create OutputConfig from dictionary."""
        return cls(
            directory=data.get("directory", "output"),
            dialects=list(data.get("dialects", SUPPORTED_DIALECTS)),
            timestamps=data.get("timestamps", True),
        )


@dataclass
class FileItemConfig:
    """Configuration for a single sample file."""

    name: str  # Logical name for the file (like table name)
    file_path: Optional[str] = None
    http_path: Optional[str] = None
    options: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.file_path and not self.http_path:
            raise ConfigurationException(
                "Either file_path or http_path must be provided", source=self.name
            )
        if self.file_path and self.http_path:
            raise ConfigurationException(
                "Cannot specify both file_path and http_path", source=self.name
            )

    @classmethod
    def from_path(cls, path: str, options: Optional[Dict[str, Any]] = None) -> "FileItemConfig":
        """Create FileItemConfig for a local path or HTTP/HTTPS URL."""
        name = Path(path).stem
        if path.startswith("http://") or path.startswith("https://"):
            return cls(name=name, http_path=path, options=options or {})
        return cls(name=name, file_path=path, options=options or {})


@dataclass
class DatabaseConfig:
    """Configuration for database connections."""

    type: str
    host: str
    port: int
    user: str
    password: str
    database: str
    schema: Optional[str] = None
    charset: str = "utf8mb4"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DatabaseConfig":
        """Create DatabaseConfig from dictionary."""
        db_type = data.get("type", "")
        if db_type not in SUPPORTED_DATABASES:
            raise ConfigurationException(
                f"Unsupported database type '{db_type}'",
                operation="config",
                details={"allowed": list(SUPPORTED_DATABASES)},
            )
        try:
            return cls(
                type=db_type,
                host=data["host"],
                port=data.get("port", 3306 if db_type == "mysql" else 5432),
                user=data["user"],
                password=data["password"],
                database=data["database"],
                schema=data.get("schema"),
                charset=data.get("charset", "utf8mb4"),
            )
        except KeyError as e:
            raise ConfigurationException(
                f"Missing required database setting: {e.args[0]}",
                operation="config",
            ) from e


@dataclass
class Config:
    """Main configuration object."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    destination: Optional[DatabaseConfig] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        destination = None
        if data.get("destination"):
            destination = DatabaseConfig.from_dict(data["destination"])

        return cls(
            logging=LoggingConfig.from_dict(data.get("logging") or {}),
            inference=InferenceConfig.from_dict(data.get("inference") or {}),
            output=OutputConfig.from_dict(data.get("output") or {}),
            destination=destination,
        )

    @classmethod
    def read_config(cls, path: str) -> "Config":
        """Read configuration from YAML file."""
        try:
            with open(path, "r") as file:
                data = yaml.safe_load(file)
        except FileNotFoundError as e:
            raise ConfigurationException(
                f"Configuration file not found: {path}", operation="config"
            ) from e
        except yaml.YAMLError as e:
            raise ConfigurationException(
                f"Invalid YAML in configuration file {path}: {e}", operation="config"
            ) from e

        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration file {path} must contain a mapping", operation="config"
            )
        return cls.from_dict(data)

    @classmethod
    def load(cls, path: Optional[str], default_path: str) -> "Config":
        """Read ``path``, falling back to defaults when the default file is absent."""
        if path is None:
            path = default_path
            if not Path(path).exists():
                logger.debug(f"No configuration file at '{path}', using defaults")
                return cls()
        return cls.read_config(path)
