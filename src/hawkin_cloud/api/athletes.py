"""
Athlete roster: list, create and update athletes.
"""

import logging
from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Union

import pandas as pd

from hawkin_cloud.api.normalize import collapse_external
from hawkin_cloud.sdk import athletes as sdk_athletes
from hawkin_cloud.sdk.client import HawkinClient
from hawkin_cloud.sdk.exceptions import ValidationError
from hawkin_cloud.utils import is_missing, join_values, split_values

logger = logging.getLogger(__name__)

ATHLETE_FIELDS = ("name", "image", "active", "teams", "groups")

AthleteInput = Union[pd.DataFrame, Iterable[Dict[str, Any]]]


def get_athletes(client: HawkinClient, include_inactive: bool = False) -> pd.DataFrame:
    """Athletes as a table: id, name, active, teams, groups, external.

    teams/groups are "," joined ids; external is "provider:id,..." or NA.
    """
    data = sdk_athletes.get_athletes(client, include_inactive=include_inactive)

    rows = [
        {
            "id": a.get("id"),
            "name": a.get("name"),
            "active": a.get("active"),
            "teams": join_values(a.get("teams") or []),
            "groups": join_values(a.get("groups") or []),
            "external": collapse_external(a.get("external")),
        }
        for a in data.get("data", [])
    ]
    df = pd.DataFrame(rows, columns=["id", "name", "active", "teams", "groups", "external"])
    logger.info("get_athletes -> %d athletes returned", len(df))
    return df


def create_athletes(client: HawkinClient, athletes: AthleteInput) -> dict:
    """Create athletes in bulk. Each record needs a name.

    Columns other than name, image, active, teams and groups are sent as
    external ids.
    """
    records = _records(athletes)
    payload = [_athlete_payload(r, require="name") for r in records]
    response = sdk_athletes.create_athletes(client, payload)
    return _summarize(response, "create_athletes", "added")


def update_athletes(client: HawkinClient, athletes: AthleteInput) -> dict:
    """Update athletes in bulk. Each record needs an id."""
    records = _records(athletes)
    payload = [_athlete_payload(r, require="id") for r in records]
    response = sdk_athletes.update_athletes(client, payload)
    return _summarize(response, "update_athletes", "updated")


def _records(athletes: AthleteInput) -> List[Dict[str, Any]]:
    if isinstance(athletes, pd.DataFrame):
        return athletes.to_dict(orient="records")
    return [dict(a) for a in athletes]


def _athlete_payload(record: Dict[str, Any], require: str) -> Dict[str, Any]:
    if is_missing(record.get(require)):
        raise ValidationError(f"athleteData must contain a {require} for every athlete")

    athlete = OrderedDict()
    if require == "id":
        athlete["id"] = record["id"]

    for field in ATHLETE_FIELDS:
        value = record.get(field)
        if is_missing(value):
            continue
        if field in ("teams", "groups"):
            value = split_values(value)
        athlete[field] = value

    skip = set(ATHLETE_FIELDS) | {"id", "external"}
    external = record.get("external")
    external = dict(external) if isinstance(external, dict) else {}
    for column, value in record.items():
        if column not in skip and not is_missing(value):
            external[column] = value
    athlete["external"] = external
    return dict(athlete)


def _summarize(response: Dict[str, Any], operation: str, verb: str) -> dict:
    succeeded = [a.get("name") for a in response.get("data") or []]

    by_reason = OrderedDict()
    for failure in response.get("failures") or []:
        name = (failure.get("data") or {}).get("name")
        by_reason.setdefault(failure.get("reason"), []).append(name)
    failures = [{"reason": reason, "names": names} for reason, names in by_reason.items()]

    if succeeded:
        logger.info(
            "%s -> %d athletes %s successfully: %s",
            operation, len(succeeded), verb, ", ".join(str(n) for n in succeeded),
        )
    if failures:
        details = " | ".join(
            f"{f['reason']} [{', '.join(str(n) for n in f['names'])}]" for f in failures
        )
        logger.warning(
            "%s -> %d athletes failed || %s",
            operation, sum(len(f["names"]) for f in failures), details,
        )

    return {"succeeded": succeeded, "failures": failures}
