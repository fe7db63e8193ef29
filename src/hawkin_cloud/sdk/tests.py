"""
Hawkin tests SDK functions.

The tests listing lives at the root of the regional data API.
"""

from typing import Any, Dict, Optional

from hawkin_cloud.sdk.client import HawkinClient

TESTS_ENDPOINT = ""


def get_tests(client: HawkinClient, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Get trials, optionally filtered.

    GET /

    Args:
        params: Query parameters, any of from/to or syncFrom/syncTo plus one
            of athleteId, testTypeId, teamId, groupId

    Returns:
        {data: [{id, active, timestamp, segment, testType{}, athlete{}, <metrics>}],
         count, lastSyncTime, lastTestTime}
    """
    return client.make_request("GET", TESTS_ENDPOINT, params=params, operation="get_tests")
