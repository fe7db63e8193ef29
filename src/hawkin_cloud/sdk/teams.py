"""
Hawkin teams SDK functions.
"""

from typing import Any, Dict

from hawkin_cloud.sdk.client import HawkinClient


def get_teams(client: HawkinClient) -> Dict[str, Any]:
    """
    Get the organization's teams.

    GET /teams

    Returns:
        {data: [{id, name}], count}
    """
    return client.make_request("GET", "teams", operation="get_teams")
