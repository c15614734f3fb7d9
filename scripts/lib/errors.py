"""
Custom error classes for the Sales Monitor.
Structured error handling with error codes for the ingestion and config layers.
The aggregation engine never raises; everything here originates at a boundary.

Hierarchy:
    MonitorError
    ├── APIError
    │   └── APITimeoutError
    └── DataError
        ├── ConfigError
        ├── SchemaValidationError
        └── DataFetchError
"""


class MonitorError(Exception):
    """Base exception for all Sales Monitor errors."""

    def __init__(self, message: str, code: str = "UNKNOWN", details: dict = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(f"[{code}] {message}")


# --- API Errors ---

class APIError(MonitorError):
    """The webhook answered with a non-success status."""

    def __init__(self, message: str, code: str = "API_ERROR",
                 status_code: int = None, url: str = None, **kwargs):
        self.status_code = status_code
        self.url = url
        details = {"status_code": status_code, "url": url, **kwargs}
        super().__init__(message, code=code, details=details)


class APITimeoutError(APIError):
    """Request timed out."""

    def __init__(self, url: str, timeout: float):
        super().__init__(
            f"Webhook did not answer within {timeout:g}s",
            code="API_TIMEOUT", url=url, timeout=timeout,
        )


# --- Data Errors ---

class DataError(MonitorError):
    """Base class for data loading and validation errors."""
    pass


class ConfigError(DataError):
    """Missing or invalid configuration."""

    def __init__(self, message: str, setting: str = None):
        super().__init__(
            message, code="CONFIG_ERROR",
            details={"setting": setting},
        )


class SchemaValidationError(DataError):
    """Payload doesn't have a shape that can be turned into deal records."""

    def __init__(self, message: str, field: str = None):
        super().__init__(
            message, code="SCHEMA_INVALID", details={"field": field},
        )


class DataFetchError(DataError):
    """Failed to fetch or load deal records."""

    def __init__(self, message: str, source: str = None):
        super().__init__(
            message, code="DATA_FETCH_FAILED", details={"source": source},
        )
