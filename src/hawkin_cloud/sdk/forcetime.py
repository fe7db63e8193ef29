"""
Hawkin force-time SDK functions.
"""

from typing import Any, Dict

from hawkin_cloud.sdk.client import HawkinClient


def get_forcetime(client: HawkinClient, test_id: str) -> Dict[str, Any]:
    """
    Get raw per-millisecond samples for one trial.

    GET /forcetime/{testId}

    Returns:
        {"Time(s)": [...], "RightForce(N)": [...], "LeftForce(N)": [...],
         "CombinedForce(N)": [...], "Velocity(m/s)": [...], ...}
    """
    return client.make_request("GET", f"forcetime/{test_id}", operation="get_forcetime")
