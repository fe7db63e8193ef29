"""
Hawkin athletes SDK functions.
"""

from typing import Any, Dict, List

from hawkin_cloud.sdk.client import HawkinClient


def get_athletes(client: HawkinClient, include_inactive: bool = False) -> Dict[str, Any]:
    """
    Get the organization's athletes.

    GET /athletes

    Returns:
        {data: [{id, name, active, teams[], groups[], external{}}], count}
    """
    params = {"includeInactive": "true"} if include_inactive else None
    return client.make_request("GET", "athletes", params=params, operation="get_athletes")


def create_athletes(client: HawkinClient, athletes: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Create athletes in bulk.

    POST /athletes/bulk

    Args:
        athletes: [{name, image?, active?, teams?, groups?, external{}}]

    Returns:
        {data: [created athletes], failures: [{reason, data}], hasFailures}
    """
    return client.make_request(
        "POST", "athletes/bulk", json_data=athletes, operation="create_athletes",
    )


def update_athletes(client: HawkinClient, athletes: List[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Update athletes in bulk.

    PUT /athletes/bulk

    Args:
        athletes: [{id, name?, image?, active?, teams?, groups?, external{}}]

    Returns:
        {data: [updated athletes], failures: [{reason, data}], hasFailures}
    """
    return client.make_request(
        "PUT", "athletes/bulk", json_data=athletes, operation="update_athletes",
    )
