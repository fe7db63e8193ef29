"""
Test listing: the parameterized query over all trials.

Validates filters, calls the SDK, normalizes the trials into a DataFrame
and drops inactive trials unless asked not to.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Union

import pandas as pd

from hawkin_cloud.api.model import TestQuery
from hawkin_cloud.api.normalize import trials_frame
from hawkin_cloud.sdk import tests as sdk_tests
from hawkin_cloud.sdk.client import HawkinClient
from hawkin_cloud.sdk.exceptions import NotFoundError
from hawkin_cloud.utils import epoch_to_local

logger = logging.getLogger(__name__)


@dataclass
class TestResults:
    """Normalized trials plus the response envelope's sync markers."""
    __test__ = False

    frame: pd.DataFrame
    count: int
    last_sync_time: Optional[int]
    last_test_time: Optional[int]

    def with_sync_columns(self) -> pd.DataFrame:
        """The frame with last_test_time/last_sync_time columns appended."""
        df = self.frame.copy()
        df["last_test_time"] = self.last_test_time
        df["last_sync_time"] = self.last_sync_time
        return df


def list_tests(
    client: HawkinClient,
    from_time: Optional[float] = None,
    to_time: Optional[float] = None,
    sync: bool = False,
    include_inactive: bool = False,
    athlete_id: Optional[str] = None,
    type_id: Optional[str] = None,
    team_id: Optional[Union[str, List[str]]] = None,
    group_id: Optional[Union[str, List[str]]] = None,
) -> TestResults:
    """
    List trials, optionally filtered by time range and one id filter.

    Args:
        from_time: Epoch seconds lower bound (changed-since when sync=True)
        to_time: Epoch seconds upper bound (changed-until when sync=True)
        sync: Interpret from/to as a sync window instead of trial timestamps
        include_inactive: Keep trials flagged inactive
        athlete_id, type_id, team_id, group_id: At most one may be given.
            type_id accepts a canonical id, name or abbreviation.

    Raises:
        ValidationError: If the filters are invalid (no request is made)
        NotFoundError: If the server reports zero tests
    """
    query = TestQuery(
        from_time=from_time,
        to_time=to_time,
        sync=sync,
        include_inactive=include_inactive,
        athlete_id=athlete_id,
        type_id=type_id,
        team_id=team_id,
        group_id=group_id,
    )
    query.validate()
    client.require_session()

    response = sdk_tests.get_tests(client, query.to_params())

    count = response.get("count") or 0
    data = response.get("data") or []
    if count == 0 or not data:
        raise NotFoundError(
            "get_tests -> No tests returned. Check the filters and from/to entries."
        )

    df = trials_frame(data)
    if not include_inactive:
        df = df[df["active"].eq(True)].reset_index(drop=True)

    results = TestResults(
        frame=df,
        count=count,
        last_sync_time=response.get("lastSyncTime"),
        last_test_time=response.get("lastTestTime"),
    )
    logger.info(
        "get_tests -> %d trials returned. Last test: %s | Last sync: %s",
        len(df),
        epoch_to_local(results.last_test_time),
        epoch_to_local(results.last_sync_time),
    )
    return results


def list_tests_for_athlete(client: HawkinClient, athlete_id: str, **kwargs) -> TestResults:
    """Trials of one athlete."""
    return list_tests(client, athlete_id=athlete_id, **kwargs)


def list_tests_for_type(client: HawkinClient, type_id: str, **kwargs) -> TestResults:
    """Trials of one test type (id, name or abbreviation)."""
    return list_tests(client, type_id=type_id, **kwargs)


def list_tests_for_team(client: HawkinClient, team_id: Union[str, List[str]], **kwargs) -> TestResults:
    """Trials of athletes on one or more teams."""
    return list_tests(client, team_id=team_id, **kwargs)


def list_tests_for_group(client: HawkinClient, group_id: Union[str, List[str]], **kwargs) -> TestResults:
    """Trials of athletes in one or more groups."""
    return list_tests(client, group_id=group_id, **kwargs)
