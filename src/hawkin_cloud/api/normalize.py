"""
Trial normalization: nested test records to flat table rows.

A raw trial looks like::

    {"id", "active", "timestamp", "segment",
     "testType": {"id", "name", "canonicalId", "tags": [{id, name, description}]},
     "athlete": {"id", "name", "active", "teams": [], "groups": [], "external": {}},
     <metric>: <number or null>, ...}

Every key that is not one of the structural fields above is a metric. The
metric set depends on the test type, so the table schema is the union of
the keys actually present.

In memory, athlete_teams and athlete_groups stay as lists. flatten_tests()
joins them with "," for csv/xlsx/parquet/feather storage and
expand_tests() splits them back when a stored file is loaded.
"""

from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from hawkin_cloud.utils import is_missing, join_values, split_values

STRUCTURAL_KEYS = ("id", "active", "timestamp", "segment", "testType", "athlete")

TRIAL_COLUMNS = ["id", "active", "timestamp", "segment"]

TEST_TYPE_COLUMNS = [
    "testType_id",
    "testType_name",
    "testType_canonicalId",
    "testType_tags_id",
    "testType_tags_name",
    "testType_tags_desc",
]

ATHLETE_COLUMNS = [
    "athlete_id",
    "athlete_name",
    "athlete_active",
    "athlete_teams",
    "athlete_groups",
    "athlete_external",
]

# Trial details; everything after these (and the sync columns) is a metric.
DETAIL_COLUMNS = TRIAL_COLUMNS + TEST_TYPE_COLUMNS + ATHLETE_COLUMNS

SYNC_COLUMNS = ["last_test_time", "last_sync_time"]

LIST_COLUMNS = ["athlete_teams", "athlete_groups"]

TAG_ID_SEP = ","
TAG_NAME_SEP = ","
TAG_DESC_SEP = "|"
EXTERNAL_SEP = ","


def normalize_trial(raw: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten one raw trial into an ordered row dict."""
    row = {key: raw.get(key) for key in TRIAL_COLUMNS}
    row.update(_test_type_fields(raw.get("testType") or {}))
    row.update(_athlete_fields(raw.get("athlete") or {}))

    for key, value in raw.items():
        if key not in STRUCTURAL_KEYS:
            row[key] = value
    return row


def trials_frame(trials: Iterable[Dict[str, Any]]) -> pd.DataFrame:
    """Normalize a list of raw trials into a DataFrame.

    Metric columns are ordered by first appearance; trials lacking a metric
    get NA in that column.
    """
    rows = [normalize_trial(t) for t in trials]
    if not rows:
        return pd.DataFrame(columns=DETAIL_COLUMNS)
    return pd.DataFrame(rows)


def collapse_tags(tags: Optional[List[Dict[str, Any]]]):
    """Collapse a tag list into (ids, names, descriptions) strings.

    No tags gives (None, None, None). Ids and names are joined for every
    tag; descriptions only for tags that have a non-empty one.
    """
    if not tags:
        return None, None, None

    ids = join_values([t.get("id") for t in tags], TAG_ID_SEP)
    names = join_values([t.get("name") for t in tags], TAG_NAME_SEP)
    descriptions = [
        t.get("description") for t in tags
        if not is_missing(t.get("description")) and t.get("description") != ""
    ]
    return ids, names, join_values(descriptions, TAG_DESC_SEP)


def collapse_external(external: Optional[Dict[str, Any]]) -> Optional[str]:
    """Collapse {provider: id} into "provider:id,provider:id".

    Null ids are skipped; no ids at all gives None.
    """
    if not external:
        return None
    pairs = [
        f"{provider}:{value}"
        for provider, value in external.items()
        if not is_missing(value)
    ]
    return join_values(pairs, EXTERNAL_SEP)


def parse_external(value: Any) -> Dict[str, str]:
    """Inverse of collapse_external."""
    result = {}
    for pair in split_values(value, EXTERNAL_SEP):
        provider, _, ext_id = pair.partition(":")
        result[provider] = ext_id
    return result


def split_tags(value: Any, sep: str = TAG_ID_SEP) -> List[str]:
    """Inverse of the tag joins: split a tags column value back into a list."""
    return split_values(value, sep)


def flatten_tests(df: pd.DataFrame) -> pd.DataFrame:
    """Join list-valued cells with "," so the table fits a flat file format."""
    flat = df.copy()
    for col in flat.columns:
        if flat[col].dtype == object and flat[col].map(lambda v: isinstance(v, list)).any():
            flat[col] = flat[col].map(
                lambda v: join_values(v) if isinstance(v, list) else v
            )
    return flat


def expand_tests(df: pd.DataFrame) -> pd.DataFrame:
    """Split the delimited team/group columns of a loaded file back into lists."""
    expanded = df.copy()
    for col in LIST_COLUMNS:
        if col in expanded.columns:
            expanded[col] = expanded[col].map(split_values)
    return expanded


def metric_columns(df: pd.DataFrame) -> List[str]:
    """Columns that are neither trial details nor sync bookkeeping."""
    fixed = set(DETAIL_COLUMNS) | set(SYNC_COLUMNS)
    return [c for c in df.columns if c not in fixed]


def _test_type_fields(test_type: Dict[str, Any]) -> Dict[str, Any]:
    ids, names, descriptions = collapse_tags(test_type.get("tags"))
    return {
        "testType_id": test_type.get("id"),
        "testType_name": test_type.get("name"),
        "testType_canonicalId": test_type.get("canonicalId"),
        "testType_tags_id": ids,
        "testType_tags_name": names,
        "testType_tags_desc": descriptions,
    }


def _athlete_fields(athlete: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "athlete_id": athlete.get("id"),
        "athlete_name": athlete.get("name"),
        "athlete_active": athlete.get("active"),
        "athlete_teams": list(athlete.get("teams") or []),
        "athlete_groups": list(athlete.get("groups") or []),
        "athlete_external": collapse_external(athlete.get("external")),
    }
