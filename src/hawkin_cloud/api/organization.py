"""
Organization reference data: teams, groups, tags, test types, metrics.
"""

import logging

import pandas as pd

from hawkin_cloud.sdk import groups as sdk_groups
from hawkin_cloud.sdk import metrics as sdk_metrics
from hawkin_cloud.sdk import tags as sdk_tags
from hawkin_cloud.sdk import teams as sdk_teams
from hawkin_cloud.sdk import test_types as sdk_test_types
from hawkin_cloud.sdk.client import HawkinClient
from hawkin_cloud.sdk.types import TEST_TYPES_BY_ID, resolve_test_type

logger = logging.getLogger(__name__)

METRIC_COLUMNS = ["canonicalTestTypeId", "testTypeName", "id", "label", "units", "description"]


def get_teams(client: HawkinClient) -> pd.DataFrame:
    """Teams as a table: id, name."""
    data = sdk_teams.get_teams(client)
    df = pd.DataFrame(data.get("data", []), columns=["id", "name"])
    logger.info("get_teams -> %d teams returned", len(df))
    return df


def get_groups(client: HawkinClient) -> pd.DataFrame:
    """Groups as a table: id, name."""
    data = sdk_groups.get_groups(client)
    df = pd.DataFrame(data.get("data", []), columns=["id", "name"])
    logger.info("get_groups -> %d groups returned", len(df))
    return df


def get_tags(client: HawkinClient) -> pd.DataFrame:
    """Tags as a table: id, name, description."""
    data = sdk_tags.get_tags(client)
    df = pd.DataFrame(data.get("data", []), columns=["id", "name", "description"])
    logger.info("get_tags -> %d tags returned", len(df))
    return df


def get_test_types(client: HawkinClient) -> pd.DataFrame:
    """Test types as a table: canonicalId, name, abbreviation."""
    data = sdk_test_types.get_test_types(client)
    if isinstance(data, dict):
        data = data.get("data", [])

    rows = []
    for t in data:
        canonical_id = t.get("canonicalId") or t.get("id")
        known = TEST_TYPES_BY_ID.get(canonical_id)
        rows.append({
            "canonicalId": canonical_id,
            "name": t.get("name"),
            "abbreviation": known.abbreviation if known else None,
        })
    df = pd.DataFrame(rows, columns=["canonicalId", "name", "abbreviation"])
    logger.info("get_test_types -> %d test types returned", len(df))
    return df


def get_metrics(client: HawkinClient, test_type: str = "all") -> pd.DataFrame:
    """Metric dictionary, one row per metric of each test type.

    Args:
        test_type: "all", or a test type id, name or abbreviation

    Raises:
        ValidationError: If test_type is not a known test type
    """
    type_id = None if test_type == "all" else resolve_test_type(test_type)
    data = sdk_metrics.get_metrics(client)

    rows = []
    for entry in data:
        if not entry.get("testTypeName"):
            continue
        if type_id is not None and entry.get("canonicalTestTypeId") != type_id:
            continue
        for metric in entry.get("metrics") or []:
            rows.append({
                "canonicalTestTypeId": entry.get("canonicalTestTypeId"),
                "testTypeName": entry.get("testTypeName"),
                "id": metric.get("id"),
                "label": metric.get("label"),
                "units": metric.get("units"),
                "description": metric.get("description"),
            })

    df = pd.DataFrame(rows, columns=METRIC_COLUMNS)
    logger.info("get_metrics -> %d metrics returned for %s", len(df), test_type)
    return df
