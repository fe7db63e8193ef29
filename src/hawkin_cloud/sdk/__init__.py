"""
Hawkin Dynamics cloud low-level SDK.

Thin wrapper over the Hawkin HTTP API.
Each function maps 1:1 to a Hawkin endpoint and returns the decoded JSON.
"""

from hawkin_cloud.sdk.client import HawkinClient, Session
from hawkin_cloud.sdk.exceptions import (
    AuthError,
    ConfigError,
    HawkinAPIError,
    HawkinError,
    NotFoundError,
    ServerError,
    ValidationError,
)
from hawkin_cloud.sdk.types import (
    Region,
    ForceTimeCategory,
    TEST_TYPES,
    resolve_region,
    resolve_test_type,
)

__all__ = [
    "HawkinClient",
    "Session",
    "AuthError",
    "ConfigError",
    "HawkinAPIError",
    "HawkinError",
    "NotFoundError",
    "ServerError",
    "ValidationError",
    "Region",
    "ForceTimeCategory",
    "TEST_TYPES",
    "resolve_region",
    "resolve_test_type",
]
