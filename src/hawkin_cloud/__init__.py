"""
Client for the Hawkin Dynamics force-plate cloud API.

Exchanges a refresh token for an access token, lists trials, fetches
force-time samples, reads and writes athlete records, and keeps a local
flat-file database of trials in sync with the cloud.

Typical use:

    from hawkin_cloud import HawkinClient, login, list_tests

    client = HawkinClient()
    login(client, "<refresh token>", region="Americas")
    results = list_tests(client, from_time=1704067200)
    results.frame
"""

from hawkin_cloud.sdk import (
    AuthError,
    ConfigError,
    HawkinAPIError,
    HawkinClient,
    HawkinError,
    NotFoundError,
    Region,
    ServerError,
    Session,
    ValidationError,
)
from hawkin_cloud.sdk.auth import login
from hawkin_cloud.api import (
    FileFormat,
    TestResults,
    build_database,
    create_athletes,
    get_athletes,
    get_forcetime,
    get_groups,
    get_metrics,
    get_tags,
    get_teams,
    get_test_types,
    list_tests,
    merge_tests,
    read_tests,
    sync_database,
    update_athletes,
    write_tests,
)
from hawkin_cloud.config import HawkinConfig
from hawkin_cloud.log import configure_logging

__version__ = "1.0.0"

__all__ = [
    "HawkinClient", "Session", "Region", "login",
    "HawkinError", "AuthError", "ValidationError", "NotFoundError",
    "ServerError", "ConfigError", "HawkinAPIError",
    "TestResults", "list_tests", "get_forcetime",
    "get_athletes", "create_athletes", "update_athletes",
    "get_teams", "get_groups", "get_tags", "get_test_types", "get_metrics",
    "build_database", "sync_database", "merge_tests",
    "FileFormat", "read_tests", "write_tests",
    "HawkinConfig", "configure_logging",
]
