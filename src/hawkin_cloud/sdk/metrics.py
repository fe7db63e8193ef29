"""
Hawkin metric dictionary SDK functions.
"""

from typing import Any, Dict, List

from hawkin_cloud.sdk.client import HawkinClient


def get_metrics(client: HawkinClient) -> List[Dict[str, Any]]:
    """
    Get metric definitions for every test type.

    GET /metrics

    Returns:
        [{canonicalTestTypeId, testTypeName, metrics: [{id, label, units, description}]}]
    """
    return client.make_request("GET", "metrics", operation="get_metrics")
