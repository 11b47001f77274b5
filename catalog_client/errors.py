"""
Custom exceptions for the catalog client.
Every failure has a name, so callers can tell a timeout from a bad payload.
"""
from typing import Optional


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


class CatalogError(Exception):
    """Base class for all catalog client errors."""
    pass


class CatalogFailure(CatalogError):
    """
    Base class for a failed attempt against one candidate URL.

    The URL is stored with credentials already redacted.
    """

    def __init__(self, message: str, method: Optional[str] = None, url: Optional[str] = None):
        super().__init__(message)
        self.method = method
        self.url = url


class TimeoutFailure(CatalogFailure):
    """Raised when an attempt does not answer within the policy timeout."""
    pass


class NetworkFailure(CatalogFailure):
    """Raised on transport-level faults (DNS, refused connection, TLS)."""
    pass


class HttpStatusFailure(CatalogFailure):
    """Raised when the catalog answers with a non-2xx status."""

    def __init__(self, code: int, message: str = "", method: Optional[str] = None,
                 url: Optional[str] = None):
        super().__init__(message or f"API Error: {code}", method=method, url=url)
        self.code = code


class DecodeFailure(CatalogFailure):
    """Raised when a 2xx response body is not valid JSON."""
    pass


class RetryExhaustedError(CatalogFailure):
    """Raised when all caller-level retry attempts are exhausted."""
    pass


class RequestCancelledError(CatalogError):
    """Raised when the caller cancels a request through its cancellation token."""
    pass
