"""
Exception types for the Hawkin Dynamics cloud client.

Callers can tell an expired session (AuthError) from bad input
(ValidationError), an empty or missing resource (NotFoundError) and a
failure on the Hawkin side (ServerError).
"""

from typing import Optional


class HawkinError(Exception):
    """Base exception for all Hawkin client errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(HawkinError):
    """Raised when there is no usable access token or the API rejects it."""


class ValidationError(HawkinError, ValueError):
    """Raised for malformed or mutually exclusive arguments, before any request."""


class NotFoundError(HawkinError):
    """Raised on HTTP 404, or when a query returns zero tests."""


class ServerError(HawkinError):
    """Raised on HTTP 5xx responses."""


class ConfigError(HawkinError, ValueError):
    """Raised for an unknown region, file format or logging option."""


class HawkinAPIError(HawkinError):
    """Raised for any other non-success status code."""
