"""
Error types for Course Sync.

Everything the provider layer raises is a CourseSyncError, so callers never
have to know about aiohttp exceptions.
"""

from typing import Optional


class CourseSyncError(Exception):
    """Base class for all course sync failures."""


class ConfigError(CourseSyncError):
    """Missing or invalid configuration (base URL, token, ...)."""


class TransientNetworkError(CourseSyncError):
    """Timeouts, dropped connections, HTTP 429 and 5xx. Safe to retry."""


class ApiError(CourseSyncError):
    """Non-success HTTP response that is neither transient nor an auth failure."""

    def __init__(self, status: int, url: str = "", message: str = ""):
        self.status = status
        self.url = url
        super().__init__(message or f"HTTP {status}: {url}")


class AuthorizationError(ApiError):
    """HTTP 401/403 - the token can't see this resource."""


class MalformedDataError(CourseSyncError):
    """Response body didn't have the shape we expected."""

    def __init__(self, message: str, payload: Optional[object] = None):
        self.payload = payload
        super().__init__(message)
