"""Utility functions for loading service descriptions.

Service descriptions are botocore-style JSON documents. They can be read from
a local file or fetched from a URL.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class ServiceLoaderError(Exception):
    """Raised when a service description cannot be loaded."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, dict[str, Any]]:
    """Load a service description from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ServiceLoaderError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load service description from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}", exc_info=True)
        raise ServiceLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise ServiceLoaderError(f"Error reading file {file_path}: {e}") from e

    _ensure_object(data, str(file_path))
    logger.info(f"Successfully loaded service description from {file_path}")
    return str(file_path), data


def load_json_from_url(url: str, timeout: int = 30) -> tuple[str, dict[str, Any]]:
    """Fetch a service description from a URL.

    Args:
        url: HTTP(S) URL of the JSON document.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        ServiceLoaderError: If the URL is invalid, the request fails, or the
            response is not valid JSON.
    """
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ServiceLoaderError(f"Invalid URL: {url}")

    logger.debug(f"Fetching service description from URL: {url}")
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to fetch {url}: {e}")
        raise ServiceLoaderError(f"Failed to fetch {url}: {e}") from e
    except ValueError as e:
        logger.error(f"Invalid JSON from {url}: {e}")
        raise ServiceLoaderError(f"Invalid JSON from {url}: {e}") from e

    _ensure_object(data, url)
    logger.info(f"Successfully loaded service description from {url}")
    return url, data


def load_service_json(
    file_path: str | Path | None = None, url: str | None = None
) -> tuple[str, dict[str, Any]]:
    """Load a service description from exactly one of a file or a URL."""
    if file_path and url:
        raise ValueError("Provide either file_path or url, not both")
    if file_path:
        return load_json_from_file(file_path)
    if url:
        return load_json_from_url(url)
    raise ValueError("Either file_path or url must be provided")


def _ensure_object(data: Any, source: str) -> None:
    if not isinstance(data, dict):
        raise ServiceLoaderError(
            f"Service description must be a JSON object: {source}"
        )
    for key in ("metadata", "shapes"):
        if key not in data:
            raise ServiceLoaderError(f"Service description {source} has no '{key}'")
