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
Environment File Conversion
Converts between Azure App Service settings JSON and ``.env`` files.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from dotenv import dotenv_values

from schematools.exceptions import ConversionException

logger = logging.getLogger(__name__)

_QUOTE_TRIGGERS = (" ", '"', "'", "#", "\\")


def format_env_value(value: Any) -> str:
    """Render a setting value for the right-hand side of a ``.env`` line."""
    if value is None:
        return ""
    if not isinstance(value, str):
        return json.dumps(value) if isinstance(value, bool) else str(value)
    if any(trigger in value for trigger in _QUOTE_TRIGGERS):
        return '"' + value.replace('"', '\\"') + '"'
    return value


def _read_azure_settings(azure_file: str) -> List[Dict[str, Any]]:
    path = Path(azure_file)
    if not path.is_file():
        raise ConversionException(
            f"Azure JSON file not found: {azure_file}", source=azure_file, operation="azure_to_env"
        )
    try:
        with open(path, "r", encoding="utf-8") as file:
            data = json.load(file)
    except json.JSONDecodeError as e:
        raise ConversionException(
            f"Invalid JSON in {azure_file}: {e.msg}", source=azure_file, operation="azure_to_env"
        ) from e

    if not isinstance(data, list):
        raise ConversionException(
            f"Azure settings in {azure_file} must be a JSON array",
            source=azure_file,
            operation="azure_to_env",
        )
    return data


def azure_to_env(azure_file: str, env_file: str) -> int:
    """
    Convert Azure App Settings JSON to ``.env`` format.

    Args:
        azure_file: JSON array of ``{"name", "value", "slotSetting"}`` objects
        env_file: Destination ``.env`` path, overwritten

    Returns:
        Number of settings written
    """
    settings = _read_azure_settings(azure_file)
    logger.info(f"Converting Azure settings '{azure_file}' to .env format")

    lines = [
        "# Generated from Azure App Settings",
        f"# Generated on: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}",
        f"# Source file: {azure_file}",
        "",
    ]
    count = 0
    for setting in settings:
        if not isinstance(setting, dict) or "name" not in setting or "value" not in setting:
            logger.debug(f"Skipping malformed setting: {setting!r}")
            continue
        lines.append(f"{setting['name']}={format_env_value(setting['value'])}")
        count += 1

    with open(env_file, "w", encoding="utf-8") as file:
        file.write("\n".join(lines) + "\n")

    logger.info(f"Wrote {count} settings to {env_file}")
    return count


def env_to_azure(env_file: str, azure_file: str) -> int:
    """
    Convert a ``.env`` file to Azure App Settings JSON.

    Empty values become ``null``; every setting gets ``slotSetting: false``.

    Returns:
        Number of settings written
    """
    if not Path(env_file).is_file():
        raise ConversionException(
            f".env file not found: {env_file}", source=env_file, operation="env_to_azure"
        )
    logger.info(f"Converting .env file '{env_file}' to Azure settings format")

    values = dotenv_values(env_file, interpolate=False)
    settings = [
        {"name": name, "value": value if value else None, "slotSetting": False}
        for name, value in values.items()
    ]

    with open(azure_file, "w", encoding="utf-8") as file:
        json.dump(settings, file, indent=4)
        file.write("\n")

    logger.info(f"Wrote {len(settings)} settings to {azure_file}")
    return len(settings)
