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
"""Generators for SQL DDL, Alembic migrations and SQLAlchemy models."""

from schematools.generators.migration import MigrationGenerator
from schematools.generators.model import ModelGenerator
from schematools.generators.sql import DIALECTS, SqlGenerator

__all__ = ["DIALECTS", "MigrationGenerator", "ModelGenerator", "SqlGenerator"]
