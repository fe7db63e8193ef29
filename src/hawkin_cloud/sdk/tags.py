"""
Hawkin tags SDK functions.
"""

from typing import Any, Dict

from hawkin_cloud.sdk.client import HawkinClient


def get_tags(client: HawkinClient) -> Dict[str, Any]:
    """
    Get the organization's test tags.

    GET /tags

    Returns:
        {data: [{id, name, description}]}
    """
    return client.make_request("GET", "tags", operation="get_tags")
