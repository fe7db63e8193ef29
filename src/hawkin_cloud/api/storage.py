"""
Reading and writing the local tests database file.

Flat formats (csv, xlsx, parquet, feather) store list columns as ","
joined strings; pickle formats keep the DataFrame as-is, with optional
compression.
"""

import logging
import re
from enum import Enum
from pathlib import Path
from typing import Dict, Union

import pandas as pd

from hawkin_cloud.api.normalize import (
    DETAIL_COLUMNS,
    LIST_COLUMNS,
    SYNC_COLUMNS,
    expand_tests,
    flatten_tests,
    metric_columns,
)
from hawkin_cloud.sdk.exceptions import ConfigError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Excel caps sheet names at 31 characters and rejects []:*?/\
MAX_SHEET_NAME = 31
INVALID_SHEET_CHARS = re.compile(r"[\[\]:*?/\\]")

STRING_COLUMNS = ["id", "segment", "testType_id", "testType_canonicalId", "athlete_id"] + LIST_COLUMNS


class FileFormat(Enum):
    """Supported database file formats."""
    CSV = "csv"
    XLSX = "xlsx"
    PARQUET = "parquet"
    FEATHER = "feather"
    PICKLE = "pickle"
    PICKLE_GZ = "pickle_gz"
    PICKLE_BZ2 = "pickle_bz2"
    PICKLE_XZ = "pickle_xz"

    @property
    def extension(self) -> str:
        return EXTENSIONS[self]

    @property
    def is_flat(self) -> bool:
        return self in FLAT_FORMATS


EXTENSIONS: Dict[FileFormat, str] = {
    FileFormat.CSV: ".csv",
    FileFormat.XLSX: ".xlsx",
    FileFormat.PARQUET: ".parquet",
    FileFormat.FEATHER: ".feather",
    FileFormat.PICKLE: ".pkl",
    FileFormat.PICKLE_GZ: ".pkl.gz",
    FileFormat.PICKLE_BZ2: ".pkl.bz2",
    FileFormat.PICKLE_XZ: ".pkl.xz",
}

FLAT_FORMATS = {FileFormat.CSV, FileFormat.XLSX, FileFormat.PARQUET, FileFormat.FEATHER}


def resolve_format(file_format: Union[FileFormat, str]) -> FileFormat:
    """Accept a FileFormat member or its value ("csv", "pickle_gz", ...)."""
    if isinstance(file_format, FileFormat):
        return file_format
    try:
        return FileFormat(str(file_format).lower())
    except ValueError:
        valid = ", ".join(f.value for f in FileFormat)
        raise ConfigError(f"Unsupported file format {file_format!r}. Must be one of: {valid}")


def detect_format(path: PathLike) -> FileFormat:
    """Infer the format from a file name's extension."""
    name = str(path).lower()
    # longest extension first so ".pkl.gz" wins over ".pkl"
    for fmt, ext in sorted(EXTENSIONS.items(), key=lambda item: -len(item[1])):
        if name.endswith(ext):
            return fmt
    raise ConfigError(f"Cannot infer file format from {str(path)!r}")


def ensure_extension(path: PathLike, file_format: Union[FileFormat, str]) -> Path:
    """Append the format's extension unless the path already ends with it."""
    fmt = resolve_format(file_format)
    path = str(path)
    if not path.lower().endswith(fmt.extension):
        path = path + fmt.extension
    return Path(path)


def segment_prefix(segment) -> str:
    """Test-type prefix of a segment: "CMJ-2:Trial 1" -> "CMJ"."""
    return str(segment).split(":", 1)[0].split("-", 1)[0].strip()


def write_tests(df: pd.DataFrame, path: PathLike, file_format: Union[FileFormat, str]) -> Path:
    """Write a tests table, flattening list columns for flat formats.

    Returns:
        The path written (with extension)
    """
    fmt = resolve_format(file_format)
    path = ensure_extension(path, fmt)
    out = flatten_tests(df) if fmt.is_flat else df

    if fmt is FileFormat.CSV:
        out.to_csv(path, index=False)
    elif fmt is FileFormat.PARQUET:
        out.to_parquet(path, index=False)
    elif fmt is FileFormat.FEATHER:
        out.reset_index(drop=True).to_feather(path)
    elif fmt is FileFormat.XLSX:
        _write_xlsx(out, path)
    else:
        out.to_pickle(path)  # compression inferred from the extension

    logger.info("write_tests -> %d tests saved to %s", len(df), path)
    return path


def read_tests(path: PathLike) -> pd.DataFrame:
    """Read a tests table written by write_tests, restoring list columns."""
    fmt = detect_format(path)

    if fmt is FileFormat.CSV:
        df = pd.read_csv(path, dtype=_string_dtypes(pd.read_csv(path, nrows=0).columns))
    elif fmt is FileFormat.PARQUET:
        df = pd.read_parquet(path)
    elif fmt is FileFormat.FEATHER:
        df = pd.read_feather(path)
    elif fmt is FileFormat.XLSX:
        df = _read_xlsx(path)
    else:
        return pd.read_pickle(path)

    return expand_tests(df)


def split_by_test_type(df: pd.DataFrame) -> Dict[str, pd.DataFrame]:
    """One table per segment prefix, without metrics that are all missing."""
    sheets = {}
    if df.empty:
        return sheets

    prefixes = df["segment"].map(segment_prefix)
    fixed = [c for c in df.columns if c in DETAIL_COLUMNS or c in SYNC_COLUMNS]
    for prefix in prefixes.unique():
        part = df[prefixes == prefix]
        metrics = [c for c in metric_columns(part) if part[c].notna().any()]
        sheets[sheet_name(prefix, sheets)] = part[fixed + metrics]
    return sheets


def sheet_name(prefix: str, taken) -> str:
    """A valid Excel sheet name for prefix, suffixed "_2", "_3"... if taken."""
    base = INVALID_SHEET_CHARS.sub("_", str(prefix)).strip("' ") or "tests"
    used = {name.lower() for name in taken}  # Excel compares names case-insensitively
    name = base[:MAX_SHEET_NAME]
    n = 1
    while name.lower() in used:
        n += 1
        suffix = f"_{n}"
        name = base[:MAX_SHEET_NAME - len(suffix)] + suffix
    return name


def _write_xlsx(df: pd.DataFrame, path: Path):
    sheets = split_by_test_type(df)
    if not sheets:
        sheets = {"tests": df}
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for name, part in sheets.items():
            part.to_excel(writer, sheet_name=name, index=False)


def _read_xlsx(path: PathLike) -> pd.DataFrame:
    sheets = pd.read_excel(path, sheet_name=None, engine="openpyxl", dtype=str)
    df = pd.concat(sheets.values(), ignore_index=True, sort=False)
    return _restore_xlsx_types(df)


def _restore_xlsx_types(df: pd.DataFrame) -> pd.DataFrame:
    # sheets are read as text so ids keep their form; restore the rest
    restored = df.copy()
    for col in restored.columns:
        if col in STRING_COLUMNS or col in ("testType_name", "testType_tags_id",
                                           "testType_tags_name", "testType_tags_desc",
                                           "athlete_name", "athlete_external"):
            continue
        if col in ("active", "athlete_active"):
            restored[col] = restored[col].map({"True": True, "False": False})
            continue
        converted = pd.to_numeric(restored[col], errors="coerce")
        if converted.notna().sum() == restored[col].notna().sum():
            restored[col] = converted
    return restored


def _string_dtypes(columns) -> Dict[str, str]:
    return {c: "str" for c in columns if c in STRING_COLUMNS}
