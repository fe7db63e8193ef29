"""
High-Level API: tables for Hawkin Dynamics force-plate data.

Every function returns a pandas DataFrame (or a path for the database
builders). Composes with the SDK layer internally.

Modules:
    tests       : Trials        (listing with time and id filters)
    forcetime   : Raw samples   (force, velocity, power per trial)
    athletes    : Roster        (list, create, update)
    organization: Reference     (teams, groups, tags, test types, metrics)
    database    : Local copy    (bulk export, incremental sync)
    storage     : File formats  (csv, xlsx, parquet, feather, pickle)
"""

# Model
from hawkin_cloud.api.model import TestQuery

# Tests
from hawkin_cloud.api.tests import (
    TestResults,
    list_tests,
    list_tests_for_athlete,
    list_tests_for_type,
    list_tests_for_team,
    list_tests_for_group,
)

# Force-time
from hawkin_cloud.api.forcetime import get_forcetime

# Athletes
from hawkin_cloud.api.athletes import get_athletes, create_athletes, update_athletes

# Organization
from hawkin_cloud.api.organization import (
    get_teams,
    get_groups,
    get_tags,
    get_test_types,
    get_metrics,
)

# Database
from hawkin_cloud.api.database import build_database, sync_database, merge_tests

# Storage
from hawkin_cloud.api.storage import FileFormat, read_tests, write_tests

__all__ = [
    # Model
    "TestQuery",
    # Tests
    "TestResults", "list_tests", "list_tests_for_athlete", "list_tests_for_type",
    "list_tests_for_team", "list_tests_for_group",
    # Force-time
    "get_forcetime",
    # Athletes
    "get_athletes", "create_athletes", "update_athletes",
    # Organization
    "get_teams", "get_groups", "get_tags", "get_test_types", "get_metrics",
    # Database
    "build_database", "sync_database", "merge_tests",
    # Storage
    "FileFormat", "read_tests", "write_tests",
]
