"""
Hawkin test types SDK functions.
"""

from typing import Any, Dict, List, Union

from hawkin_cloud.sdk.client import HawkinClient


def get_test_types(client: HawkinClient) -> Union[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Get the test protocols available to the organization.

    GET /test_types

    Returns:
        [{canonicalId, name}] (some deployments wrap it as {data: [...]})
    """
    return client.make_request("GET", "test_types", operation="get_test_types")
