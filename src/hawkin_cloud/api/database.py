"""
Local tests database: bulk export and incremental sync.

build_database() pages through the trial history in fixed-width time
windows and writes one table. sync_database() asks the server only for
trials changed since the table's last sync and merges them in by id.
"""

import logging
import time
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import pandas as pd

from hawkin_cloud.api.storage import (
    FileFormat,
    PathLike,
    detect_format,
    ensure_extension,
    read_tests,
    resolve_format,
    write_tests,
)
from hawkin_cloud.api.tests import list_tests
from hawkin_cloud.sdk.client import HawkinClient
from hawkin_cloud.sdk.exceptions import AuthError, HawkinError, NotFoundError, ValidationError
from hawkin_cloud.sdk.types import resolve_test_type
from hawkin_cloud.utils import SECONDS_PER_DAY, epoch_to_local, is_missing, to_epoch

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 14


def time_windows(start: float, end: float, window_days: int = DEFAULT_WINDOW_DAYS) -> Iterator[Tuple[int, int]]:
    """Yield (from, to) epoch pairs walking backward from end to start.

    The oldest window is clipped to start, so 30 days at 14 gives windows
    of 14, 14 and 2 days.
    """
    if window_days <= 0:
        raise ValidationError("window_days must be a positive number of days")
    step = int(window_days * SECONDS_PER_DAY)
    start, end = int(start), int(end)
    while end > start:
        lower = max(end - step, start)
        yield lower, end
        end = lower


def build_database(
    client: HawkinClient,
    start_date,
    output_path: PathLike,
    test_type: str = "all",
    include_inactive: bool = False,
    file_format: Union[FileFormat, str] = FileFormat.CSV,
    window_days: int = DEFAULT_WINDOW_DAYS,
    now: Optional[float] = None,
) -> Path:
    """
    Export every trial since start_date to a local file.

    Args:
        start_date: Epoch seconds, date, datetime or "YYYY-MM-DD"
        output_path: Destination; the format's extension is appended if missing
        test_type: "all", or a test type id, name or abbreviation
        file_format: One of FileFormat (or its value)
        window_days: Width of each query window
        now: Upper bound of the export, epoch seconds (defaults to now)

    Returns:
        The path written

    Raises:
        ValidationError: If start_date is not in the past or test_type is unknown
        NotFoundError: If no window returned any trial
        AuthError: If the session is missing or expired
    """
    fmt = resolve_format(file_format)
    start = to_epoch(start_date)
    end = int(time.time() if now is None else now)
    if start >= end:
        raise ValidationError(f"start_date {epoch_to_local(start)} must be in the past")

    # unknown types fail here, not once per window
    type_id = None if test_type == "all" else resolve_test_type(test_type)
    client.require_session()

    frames: List[pd.DataFrame] = []
    for window_from, window_to in time_windows(start, end, window_days):
        try:
            results = list_tests(
                client,
                from_time=window_from,
                to_time=window_to,
                include_inactive=include_inactive,
                type_id=type_id,
            )
        except (AuthError, ValidationError):
            raise
        except HawkinError as e:
            logger.info(
                "build_database -> Window %s to %s skipped: %s",
                epoch_to_local(window_from).date(), epoch_to_local(window_to).date(), e,
            )
            continue
        frames.append(results.with_sync_columns())

    if not frames:
        raise NotFoundError(
            f"build_database -> No tests found since {epoch_to_local(start).date()}"
        )

    df = _dedupe_sorted(pd.concat(frames, ignore_index=True, sort=False))
    path = write_tests(df, output_path, fmt)
    logger.info("build_database -> %d tests written to %s", len(df), path)
    return path


def sync_database(
    client: HawkinClient,
    path: PathLike,
    include_inactive: bool = False,
    new_path: Optional[PathLike] = None,
    keep_all_columns: bool = False,
) -> Path:
    """
    Bring a local database file up to date with the server.

    Fetches the trials created, edited or deactivated since the file's
    newest last_sync_time and merges them in by id.

    Args:
        path: Existing database file written by build_database
        new_path: Write the result here instead of overwriting path
        keep_all_columns: Keep metric columns present on only one side

    Returns:
        The path written
    """
    fmt = detect_format(path)
    existing = read_tests(path)

    last_sync = _last_sync_time(existing)
    type_id = _single_test_type(existing)

    try:
        results = list_tests(
            client,
            from_time=last_sync,
            sync=True,
            include_inactive=include_inactive,
            type_id=type_id,
        )
    except NotFoundError:
        logger.info("sync_database -> No changes since %s", epoch_to_local(last_sync))
        merged = existing
    else:
        delta = results.with_sync_columns()
        merged = merge_tests(existing, delta, keep_all_columns=keep_all_columns)
        logger.info(
            "sync_database -> %d tests synced, %d total", len(delta), len(merged)
        )

    target = path if new_path is None else ensure_extension(new_path, fmt)
    return write_tests(merged, target, fmt)


def merge_tests(existing: pd.DataFrame, delta: pd.DataFrame, keep_all_columns: bool = False) -> pd.DataFrame:
    """
    Merge a sync delta into an existing tests table.

    Rows whose id appears in delta are replaced by the delta row; new ids
    are appended; no row is ever dropped. Columns are the intersection of
    both tables (in existing order) unless keep_all_columns, which takes
    the union and fills the gaps with NA. The result is sorted newest first.
    """
    if keep_all_columns:
        columns = list(existing.columns) + [c for c in delta.columns if c not in existing.columns]
    else:
        columns = [c for c in existing.columns if c in delta.columns]

    old = existing.reindex(columns=columns)
    new = delta.reindex(columns=columns).drop_duplicates(subset="id", keep="last")
    kept = old[~old["id"].isin(new["id"])]

    merged = pd.concat([kept, new], ignore_index=True, sort=False)
    return merged.sort_values("timestamp", ascending=False, kind="mergesort").reset_index(drop=True)


def _dedupe_sorted(df: pd.DataFrame) -> pd.DataFrame:
    df = df.drop_duplicates(subset="id", keep="first")
    return df.sort_values("timestamp", ascending=False, kind="mergesort").reset_index(drop=True)


def _last_sync_time(df: pd.DataFrame) -> int:
    if "last_sync_time" not in df.columns or df["last_sync_time"].dropna().empty:
        raise ValidationError(
            "sync_database -> File has no last_sync_time column. Rebuild it with build_database."
        )
    return int(pd.to_numeric(df["last_sync_time"]).max())


def _single_test_type(df: pd.DataFrame) -> Optional[str]:
    if "testType_canonicalId" not in df.columns:
        return None
    types = [t for t in df["testType_canonicalId"].unique() if not is_missing(t)]
    return types[0] if len(types) == 1 else None
