"""
Shared utility functions for the Hawkin client.

Epoch conversions and delimiter helpers used across the SDK and API layers.
"""

import math
import numbers
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Union

import pandas as pd

from hawkin_cloud.sdk.exceptions import ValidationError

SECONDS_PER_DAY = 86400


def epoch_to_local(epoch: Optional[float]) -> Optional[datetime]:
    """Convert epoch seconds to an aware datetime in the local timezone.

    Args:
        epoch: Unix timestamp in seconds

    Returns:
        Local datetime, or None if epoch is missing
    """
    if is_missing(epoch):
        return None
    return datetime.fromtimestamp(float(epoch), tz=timezone.utc).astimezone()


def to_epoch(value: Union[int, float, str, date, datetime]) -> int:
    """Convert a date-like value to epoch seconds.

    Accepts epoch seconds, a date, a datetime (naive is taken as local
    time) or a "YYYY-MM-DD" string.

    Raises:
        ValidationError: If the value cannot be interpreted as a date
    """
    if isinstance(value, bool):
        raise ValidationError(f"Invalid date: {value!r}")
    if isinstance(value, numbers.Real):
        return int(value)
    if isinstance(value, datetime):
        return int(value.timestamp())
    if isinstance(value, date):
        return int(datetime(value.year, value.month, value.day).timestamp())
    if isinstance(value, str):
        try:
            parsed = datetime.strptime(value, "%Y-%m-%d")
        except ValueError:
            raise ValidationError(
                f"Invalid date '{value}'. Use 'YYYY-MM-DD' or a Unix timestamp"
            )
        return int(parsed.timestamp())
    raise ValidationError(f"Invalid date: {value!r}")


def is_epoch(value: Any) -> bool:
    """True for a real number (numpy scalars included) that is not a bool."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def is_missing(value: Any) -> bool:
    """True for None, NaN and pandas NA."""
    if value is None:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    return value is pd.NA or value is pd.NaT


def join_values(values: List[Any], sep: str = ",") -> Optional[str]:
    """Join a list into a delimited string; an empty list gives None."""
    if not values:
        return None
    return sep.join(str(v) for v in values)


def split_values(value: Any, sep: str = ",") -> List[str]:
    """Inverse of join_values: a missing value gives an empty list."""
    if isinstance(value, list):
        return value
    if is_missing(value) or value == "":
        return []
    return str(value).split(sep)
