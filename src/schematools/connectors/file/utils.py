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
"""Local and remote access to sample files."""

import logging
import shutil
import tempfile
import urllib.request
from contextlib import contextmanager
from pathlib import Path
from typing import Generator
from urllib.error import HTTPError, URLError

from schematools.exceptions import InvalidInputException

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 64 * 1024


def is_http_path(path: str) -> bool:
    """Check if the given path is an HTTP/HTTPS URL."""
    return path.startswith("http://") or path.startswith("https://")


def _download(url: str) -> Path:
    """Copy ``url`` into a named temporary file the caller must remove."""
    suffix = Path(url.split("?", 1)[0]).suffix
    with tempfile.NamedTemporaryFile(mode="wb", suffix=suffix, delete=False) as target:
        try:
            with urllib.request.urlopen(url) as response:
                shutil.copyfileobj(response, target, DOWNLOAD_CHUNK_SIZE)
        except (HTTPError, URLError) as e:
            logger.error(f"Error downloading {url}: {e}")
            target.close()
            Path(target.name).unlink(missing_ok=True)
            raise InvalidInputException(
                f"Could not download file: {e}", source=url, operation="read"
            ) from e

    local = Path(target.name)
    logger.info(f"Downloaded {local.stat().st_size / 1024 / 1024:.1f} MB to {local}")
    return local


@contextmanager
def get_file_handle(path: str) -> Generator[Path, None, None]:
    """
    Resolve a sample file location to a readable local path.

    URLs are downloaded to a temporary file that is deleted when the context
    exits; local paths are checked and yielded as they are.

    Raises:
        InvalidInputException: If the file does not exist or cannot be downloaded
    """
    if not is_http_path(path):
        local = Path(path)
        if not local.is_file():
            raise InvalidInputException(
                f"File not found: {path}", source=path, operation="read"
            )
        yield local
        return

    logger.info(f"Downloading file from {path}")
    downloaded = _download(path)
    try:
        yield downloaded
    finally:
        downloaded.unlink(missing_ok=True)
        logger.debug(f"Cleaned up temporary file {downloaded}")
