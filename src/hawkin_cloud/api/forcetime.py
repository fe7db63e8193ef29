"""
Force-time samples for a single trial.

Which primary columns appear depends on the trial's test type (see
FORCE_TIME_CATEGORY_BY_TYPE). Tri-axial columns appear only when the
payload carries them.
"""

import logging
from typing import Any, Dict, Optional

import pandas as pd

from hawkin_cloud.sdk import forcetime as sdk_forcetime
from hawkin_cloud.sdk.client import HawkinClient
from hawkin_cloud.sdk.exceptions import NotFoundError, ValidationError
from hawkin_cloud.sdk.types import (
    FORCE_TIME_CATEGORY_BY_TYPE,
    FORCE_TIME_COLUMNS,
    FORCE_TIME_PRIMARY,
    FORCE_TIME_TIME,
    FORCE_TIME_TRI_AXIAL,
    ForceTimeCategory,
    resolve_test_type,
)

logger = logging.getLogger(__name__)


def get_forcetime(
    client: HawkinClient,
    test_id: str,
    test_type: Optional[str] = None,
) -> pd.DataFrame:
    """
    Force-time table for one trial, one row per sample.

    Args:
        test_id: Trial id (the `id` column of list_tests)
        test_type: Canonical id, name or abbreviation of the trial's test
            type. Defaults to the test type named in the payload, if any.

    Raises:
        ValidationError: If test_id is not a non-empty string
        NotFoundError: If the trial does not exist or has no samples
    """
    if not isinstance(test_id, str) or not test_id:
        raise ValidationError("Incorrect testId. Must be a character string.")
    client.require_session()

    payload = sdk_forcetime.get_forcetime(client, test_id)
    df = forcetime_frame(payload, test_type)
    if df.empty:
        raise NotFoundError(f"get_forcetime -> No samples returned for test {test_id}")

    logger.info("get_forcetime -> %d samples returned for test %s", len(df), test_id)
    return df


def forcetime_frame(payload: Dict[str, Any], test_type: Optional[str] = None) -> pd.DataFrame:
    """Assemble the time-series table from a raw force-time payload."""
    time_key, time_col = FORCE_TIME_TIME
    times = list(payload.get(time_key) or [])
    n = len(times)

    category = category_for(test_type or _payload_test_type(payload))

    columns = {time_col: times}
    for key in FORCE_TIME_COLUMNS[category]:
        values = payload.get(key)
        # backfill arrays the server omits for this test type
        columns[FORCE_TIME_PRIMARY[key]] = list(values) if values else [0.0] * n

    for key, col in FORCE_TIME_TRI_AXIAL.items():
        values = payload.get(key)
        if values:
            columns[col] = list(values)

    return pd.DataFrame(columns)


def category_for(test_type: Optional[str]) -> ForceTimeCategory:
    """Column category for a test type; unknown types get the full set."""
    if not test_type:
        return ForceTimeCategory.FULL
    try:
        canonical_id = resolve_test_type(test_type)
    except ValidationError:
        logger.warning("get_forcetime -> Unknown test type %r, using full column set", test_type)
        return ForceTimeCategory.FULL
    return FORCE_TIME_CATEGORY_BY_TYPE.get(canonical_id, ForceTimeCategory.FULL)


def _payload_test_type(payload: Dict[str, Any]) -> Optional[str]:
    test_type = payload.get("testType")
    if isinstance(test_type, dict):
        return test_type.get("canonicalId") or test_type.get("id")
    return payload.get("canonicalTestTypeId")
