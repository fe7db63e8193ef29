"""
Domain types for the Hawkin tests API.

Only TestQuery needs a dataclass: it is the one listing with several
mutually exclusive filters, and needs validation before it is sent.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from hawkin_cloud.sdk.exceptions import ValidationError
from hawkin_cloud.sdk.types import resolve_test_type
from hawkin_cloud.utils import is_epoch


IdFilter = Union[str, List[str]]


@dataclass
class TestQuery:
    """Filters for the tests listing.

    At most one of athlete_id, type_id, team_id or group_id may be set.
    With sync=True, from_time/to_time select trials created or modified in
    that range; otherwise they bound the trial timestamp.
    """
    __test__ = False

    from_time: Optional[float] = None
    to_time: Optional[float] = None
    sync: bool = False
    include_inactive: bool = False
    athlete_id: Optional[str] = None
    type_id: Optional[str] = None
    team_id: Optional[IdFilter] = None
    group_id: Optional[IdFilter] = None

    def validate(self):
        """Validate the query.

        Raises:
            ValidationError: If the query is invalid.
        """
        if self.from_time is not None and not is_epoch(self.from_time):
            raise ValidationError("`from` expecting numeric EPOCH/Unix timestamp.")
        if self.to_time is not None and not is_epoch(self.to_time):
            raise ValidationError("`to` expecting numeric EPOCH/Unix timestamp.")

        if self.athlete_id is not None and not isinstance(self.athlete_id, str):
            raise ValidationError(
                "athleteId should be a character string of an athlete ID. Example: 'athleteId'"
            )
        if self.type_id is not None:
            resolve_test_type(self.type_id)
        _validate_id_filter("teamId", self.team_id)
        _validate_id_filter("groupId", self.group_id)

        provided = sum(
            1 for f in (self.athlete_id, self.type_id, self.team_id, self.group_id)
            if f is not None
        )
        if provided > 1:
            raise ValidationError(
                "You can only specify one or none of "
                "'athleteId', 'testTypeId', 'teamId', or 'groupId'."
            )

    def to_params(self) -> Dict[str, str]:
        """Query string parameters for GET /."""
        params = {}
        if self.from_time is not None:
            params["syncFrom" if self.sync else "from"] = str(int(self.from_time))
        if self.to_time is not None:
            params["syncTo" if self.sync else "to"] = str(int(self.to_time))

        if self.athlete_id is not None:
            params["athleteId"] = self.athlete_id
        elif self.type_id is not None:
            params["testTypeId"] = resolve_test_type(self.type_id)
        elif self.team_id is not None:
            params["teamId"] = _join_ids(self.team_id)
        elif self.group_id is not None:
            params["groupId"] = _join_ids(self.group_id)
        return params


def _validate_id_filter(name: str, value):
    if value is None:
        return
    if isinstance(value, str):
        return
    if isinstance(value, (list, tuple)) and all(isinstance(v, str) for v in value):
        return
    raise ValidationError(f"{name} should be a character string or a list of IDs.")


def _join_ids(value: IdFilter) -> str:
    if isinstance(value, str):
        return value
    return ",".join(value)
