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
Unit tests for configuration module.
"""

import pytest

from schematools.config import (
    Config,
    DatabaseConfig,
    FileItemConfig,
    InferenceConfig,
    LoggingConfig,
    OutputConfig,
)
from schematools.exceptions import ConfigurationException


@pytest.mark.unit
class TestLoggingConfig:
    """Test LoggingConfig dataclass."""

    def test_logging_config_defaults(self):
        """Test LoggingConfig with default values."""
        assert LoggingConfig().level == "info"

    def test_logging_config_from_dict(self):
        """Test that levels are normalised to lower case."""
        assert LoggingConfig.from_dict({"level": "DEBUG"}).level == "debug"

    def test_logging_config_invalid_level(self):
        """Test that unknown levels are rejected."""
        with pytest.raises(ConfigurationException, match="Unknown logging level"):
            LoggingConfig.from_dict({"level": "verbose"})


@pytest.mark.unit
class TestInferenceConfig:
    """Test InferenceConfig dataclass."""

    def test_inference_config_defaults(self):
        """Test the default policy constants."""
        config = InferenceConfig()

        assert config.empty_column_length == 50
        assert config.min_varchar_length == 50
        assert config.max_varchar_length == 255
        assert config.date_length == 25
        assert config.sample_size is None

    def test_inference_config_from_dict(self):
        """Test creating InferenceConfig from dictionary."""
        config = InferenceConfig.from_dict({"max_varchar_length": 191, "sample_size": 500})

        assert config.max_varchar_length == 191
        assert config.sample_size == 500
        assert config.min_varchar_length == 50

    def test_inference_config_invalid_bounds(self):
        """Test that the varchar floor cannot exceed the ceiling."""
        with pytest.raises(ConfigurationException, match="min_varchar_length"):
            InferenceConfig(min_varchar_length=300, max_varchar_length=255)

    def test_inference_config_invalid_sample_size(self):
        """Test that the sample size must be positive."""
        with pytest.raises(ConfigurationException, match="sample_size"):
            InferenceConfig(sample_size=0)


@pytest.mark.unit
class TestOutputConfig:
    """Test OutputConfig dataclass."""

    def test_output_config_defaults(self):
        """Test OutputConfig with default values."""
        config = OutputConfig()

        assert config.directory == "output"
        assert config.dialects == ["mysql", "sqlserver", "postgresql"]
        assert config.timestamps is True

    def test_output_config_unknown_dialect(self):
        """Test that unknown SQL dialects are rejected."""
        with pytest.raises(ConfigurationException, match="oracle"):
            OutputConfig.from_dict({"dialects": ["mysql", "oracle"]})


@pytest.mark.unit
class TestFileItemConfig:
    """Test FileItemConfig dataclass."""

    def test_file_item_config_creation(self):
        """Test creating a FileItemConfig instance."""
        file_config = FileItemConfig(name="users", file_path="/path/to/users.csv")

        assert file_config.name == "users"
        assert file_config.file_path == "/path/to/users.csv"
        assert file_config.http_path is None
        assert file_config.options == {}

    def test_file_item_config_requires_a_path(self):
        """Test that a path or URL is required."""
        with pytest.raises(ConfigurationException, match="Either file_path or http_path"):
            FileItemConfig(name="users")

    def test_file_item_config_rejects_both_paths(self):
        """Test that only one location may be given."""
        with pytest.raises(ConfigurationException, match="Cannot specify both"):
            FileItemConfig(
                name="users", file_path="/tmp/users.csv", http_path="https://example.com/users.csv"
            )

    def test_file_item_config_from_path(self):
        """Test building from a local path or URL."""
        local = FileItemConfig.from_path("/data/sales-2023.csv", {"delimiter": ";"})
        remote = FileItemConfig.from_path("https://example.com/orders.json")

        assert local.name == "sales-2023"
        assert local.file_path == "/data/sales-2023.csv"
        assert local.options == {"delimiter": ";"}
        assert remote.name == "orders"
        assert remote.http_path == "https://example.com/orders.json"
        assert remote.file_path is None


@pytest.mark.unit
class TestDatabaseConfig:
    """Test DatabaseConfig dataclass."""

    def test_database_config_from_dict(self):
        """Test creating DatabaseConfig from dictionary."""
        data = {
            "type": "postgresql",
            "host": "db.example.com",
            "user": "postgres",
            "password": "secret",
            "database": "analytics",
            "schema": "staging",
        }

        db_config = DatabaseConfig.from_dict(data)

        assert db_config.type == "postgresql"
        assert db_config.port == 5432
        assert db_config.schema == "staging"

    def test_database_config_default_mysql_port(self):
        """Test the MySQL default port."""
        db_config = DatabaseConfig.from_dict(
            {"type": "mysql", "host": "localhost", "user": "u", "password": "p", "database": "d"}
        )

        assert db_config.port == 3306
        assert db_config.charset == "utf8mb4"

    def test_database_config_unsupported_type(self):
        """Test that only MySQL and PostgreSQL destinations are supported."""
        with pytest.raises(ConfigurationException, match="Unsupported database type"):
            DatabaseConfig.from_dict({"type": "oracle"})

    def test_database_config_missing_setting(self):
        """Test that a missing required key is reported."""
        with pytest.raises(ConfigurationException, match="host"):
            DatabaseConfig.from_dict({"type": "mysql", "user": "u", "password": "p", "database": "d"})


@pytest.mark.unit
class TestConfig:
    """Test main Config class."""

    def test_config_defaults(self):
        """Test Config with default values."""
        config = Config()

        assert config.logging.level == "info"
        assert config.inference == InferenceConfig()
        assert config.destination is None

    def test_read_config(self, temp_config_file):
        """Test reading a complete YAML configuration."""
        config = Config.read_config(temp_config_file)

        assert config.logging.level == "debug"
        assert config.inference.sample_size == 100
        assert config.inference.date_length == 30
        assert config.output.directory == "generated"
        assert config.output.dialects == ["mysql", "postgresql"]
        assert config.destination.type == "postgresql"
        assert config.destination.schema == "public"

    def test_read_config_missing_file(self):
        """Test that a missing file raises ConfigurationException."""
        with pytest.raises(ConfigurationException, match="Configuration file not found"):
            Config.read_config("/nonexistent/schema-tools.yaml")

    def test_read_config_invalid_yaml(self, write_file):
        """Test that malformed YAML raises ConfigurationException."""
        path = write_file("broken.yaml", "logging: [unclosed")

        with pytest.raises(ConfigurationException, match="Invalid YAML"):
            Config.read_config(path)

    def test_read_config_empty_file(self, write_file):
        """Test that an empty file means defaults."""
        path = write_file("empty.yaml", "")

        assert Config.read_config(path) == Config()

    def test_read_config_not_a_mapping(self, write_file):
        """Test that a YAML list is rejected."""
        path = write_file("list.yaml", "- one\n- two\n")

        with pytest.raises(ConfigurationException, match="must contain a mapping"):
            Config.read_config(path)

    def test_load_without_default_file(self, temp_directory):
        """Test that a missing default configuration falls back to defaults."""
        config = Config.load(None, f"{temp_directory}/schema-tools.yaml")

        assert config == Config()

    def test_load_explicit_missing_file(self, temp_directory):
        """Test that an explicitly requested file must exist."""
        with pytest.raises(ConfigurationException):
            Config.load(f"{temp_directory}/missing.yaml", "schema-tools.yaml")
