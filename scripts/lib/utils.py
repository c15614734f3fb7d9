"""
Utility functions for the Sales Monitor.
Atomic file writes, retry logic and the blocking JSON fetch used by batch scripts.

Usage:
    from scripts.lib.utils import atomic_write_json, fetch_json, retry_on_exception
"""
import json
import os
import time
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict

import requests

from scripts.lib.errors import (
    APIError,
    APITimeoutError,
    DataFetchError,
    SchemaValidationError,
)
from scripts.lib.logger import setup_logger

logger = setup_logger(__name__)


def atomic_write_json(data: Dict, file_path: str | Path, indent: int = 2) -> bool:
    """
    Write JSON data to file atomically using temp file + rename.

    Args:
        data: Dictionary to serialize as JSON.
        file_path: Target file path.
        indent: JSON indentation level.

    Returns:
        True if successful, False otherwise.
    """
    file_path = Path(file_path)
    temp_path = file_path.with_suffix(file_path.suffix + ".tmp")

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(temp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=indent, default=str)

        os.replace(temp_path, file_path)
        logger.debug("Atomically wrote JSON to %s", file_path)
        return True

    except OSError as e:
        logger.error("Failed to write JSON to %s: %s", file_path, e)
        if temp_path.exists():
            temp_path.unlink()
        return False


def retry_on_exception(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: tuple = (Exception,),
):
    """
    Decorator that retries a function on specified exceptions.

    Args:
        max_attempts: Maximum number of attempts.
        delay: Initial delay between retries in seconds.
        backoff: Multiplier for delay after each retry.
        exceptions: Tuple of exception types to catch.
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            current_delay = delay
            for attempt in range(1, max_attempts + 1):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_attempts:
                        logger.error(
                            "%s failed after %d attempts: %s",
                            func.__name__, max_attempts, e,
                        )
                        raise
                    logger.warning(
                        "%s failed (attempt %d/%d): %s. Retrying in %.1fs...",
                        func.__name__, attempt, max_attempts, e, current_delay,
                    )
                    time.sleep(current_delay)
                    current_delay *= backoff
        return wrapper
    return decorator


def fetch_json(
    url: str,
    timeout: float = 15,
    max_retries: int = 3,
    retry_delay: float = 1.0,
) -> Any:
    """
    GET a URL and return its decoded JSON body.

    Timeouts and connection errors are retried; HTTP errors are not.

    Raises:
        APITimeoutError: every attempt timed out.
        DataFetchError: the host could not be reached.
        APIError: the server answered with a non-success status.
        SchemaValidationError: the body is not valid JSON.
    """
    @retry_on_exception(
        max_attempts=max_retries,
        delay=retry_delay,
        exceptions=(
            requests.exceptions.Timeout,
            requests.exceptions.ConnectionError,
        ),
    )
    def _make_request():
        start = time.time()
        logger.debug("GET %s", url)
        response = requests.get(
            url, headers={"Accept": "application/json"}, timeout=timeout,
        )
        duration = time.time() - start
        logger.info("GET %s — %d in %.2fs", url, response.status_code, duration)
        return response

    try:
        response = _make_request()
    except requests.exceptions.Timeout:
        raise APITimeoutError(url, timeout)
    except requests.exceptions.ConnectionError as e:
        raise DataFetchError(f"Could not connect to webhook: {e}", source=url)

    if not response.ok:
        raise APIError(
            f"Webhook returned HTTP {response.status_code}",
            status_code=response.status_code, url=url,
        )

    try:
        return response.json()
    except ValueError:
        raise SchemaValidationError("Webhook response is not valid JSON")
