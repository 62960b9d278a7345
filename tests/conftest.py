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
Pytest configuration and fixtures for schema tools tests.
"""

import tempfile
import json
import os
from typing import Any, Generator, Optional

import pytest
import yaml

from schematools.config import Config, DatabaseConfig, FileItemConfig, InferenceConfig


def _write_temp_file(content: str, suffix: str) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


# Test configuration fixtures
@pytest.fixture
def sample_mysql_config() -> DatabaseConfig:
    """Sample MySQL destination configuration for testing."""
    return DatabaseConfig(
        type="mysql",
        host="localhost",
        port=3306,
        user="test_user",
        password="test_password",
        database="test_db",
        charset="utf8mb4",
    )


@pytest.fixture
def sample_postgresql_config() -> DatabaseConfig:
    """Sample PostgreSQL destination configuration for testing."""
    return DatabaseConfig(
        type="postgresql",
        host="localhost",
        port=5432,
        user="postgres_user",
        password="postgres_password",
        database="target_db",
        schema="public",
    )


@pytest.fixture
def inference_config() -> InferenceConfig:
    """Default inference policy."""
    return InferenceConfig()


@pytest.fixture
def sample_config(sample_mysql_config: DatabaseConfig) -> Config:
    """Configuration with a MySQL destination."""
    return Config(destination=sample_mysql_config)


@pytest.fixture
def temp_config_file() -> Generator[str, None, None]:
    """Create a temporary configuration file for testing."""
    config_data = {
        "logging": {"level": "debug"},
        "inference": {"sample_size": 100, "date_length": 30},
        "output": {"directory": "generated", "dialects": ["mysql", "postgresql"]},
        "destination": {
            "type": "postgresql",
            "host": "localhost",
            "port": 5432,
            "user": "postgres_user",
            "password": "postgres_password",
            "database": "target_db",
            "schema": "public",
        },
    }

    temp_file_path = _write_temp_file(yaml.dump(config_data), ".yaml")

    yield temp_file_path

    # Cleanup
    os.unlink(temp_file_path)


@pytest.fixture
def temp_csv_file() -> Generator[str, None, None]:
    """Create a temporary CSV file for testing."""
    csv_content = """id,name,email,age,price,joined
1,John Doe,john@example.com,30,19.99,2023-01-15
2,Jane Smith,jane@example.com,25,5.5,2023-02-01
3,Bob Johnson,,35,100,2023-03-10
"""

    temp_file_path = _write_temp_file(csv_content, ".csv")

    yield temp_file_path

    # Cleanup
    os.unlink(temp_file_path)


@pytest.fixture
def temp_json_file() -> Generator[str, None, None]:
    """Create a temporary JSON file for testing."""
    json_data = [
        {"id": 1, "name": "John Doe", "email": "john@example.com", "total": 10.5, "tags": ["a"]},
        {"id": 2, "name": "Jane Smith", "email": "jane@example.com", "total": 3.25, "tags": []},
        {"id": 3, "name": "Bob Johnson", "email": None, "total": 7.0, "tags": ["b", "c"]},
    ]

    temp_file_path = _write_temp_file(json.dumps(json_data), ".json")

    yield temp_file_path

    # Cleanup
    os.unlink(temp_file_path)


@pytest.fixture
def temp_directory() -> Generator[str, None, None]:
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def write_file(temp_directory: str):
    """Write ``content`` to ``name`` inside the temporary directory."""

    def _write(name: str, content: Any, as_json: bool = False) -> str:
        path = os.path.join(temp_directory, name)
        with open(path, "w", encoding="utf-8") as f:
            if as_json:
                json.dump(content, f)
            else:
                f.write(content)
        return path

    return _write


@pytest.fixture
def file_item_config():
    """Build a FileItemConfig for a local path."""

    def _build(path: str, options: Optional[dict] = None) -> FileItemConfig:
        return FileItemConfig.from_path(path, options)

    return _build


@pytest.fixture
def sample_records():
    """Sample rows as parsed from a JSON document."""
    return [
        {"id": 1, "name": "John Doe", "email": "john@example.com", "age": 30},
        {"id": 2, "name": "Jane Smith", "email": "jane@example.com", "age": 25},
        {"id": 3, "name": "Bob Johnson", "email": "bob@example.com", "age": 35},
    ]
