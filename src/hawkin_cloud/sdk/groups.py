"""
Hawkin groups SDK functions.
"""

from typing import Any, Dict

from hawkin_cloud.sdk.client import HawkinClient


def get_groups(client: HawkinClient) -> Dict[str, Any]:
    """
    Get the organization's groups.

    GET /groups

    Returns:
        {data: [{id, name}], count}
    """
    return client.make_request("GET", "groups", operation="get_groups")
