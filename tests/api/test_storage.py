"""Tests for api/storage.py: database file formats."""

import pandas as pd
import pytest
from openpyxl import load_workbook

from hawkin_cloud.api.normalize import trials_frame
from hawkin_cloud.api.storage import (
    FileFormat,
    detect_format,
    ensure_extension,
    read_tests,
    resolve_format,
    segment_prefix,
    sheet_name,
    split_by_test_type,
    write_tests,
)
from hawkin_cloud.sdk.exceptions import ConfigError
from tests.conftest import make_trial


@pytest.fixture
def tests_df(sample_trials):
    df = trials_frame(sample_trials)
    df["last_test_time"] = 1700000400
    df["last_sync_time"] = 1700000500
    return df


class TestFormats:
    def test_resolve_value(self):
        assert resolve_format("parquet") is FileFormat.PARQUET
        assert resolve_format(FileFormat.PICKLE_XZ) is FileFormat.PICKLE_XZ

    def test_resolve_unknown(self):
        with pytest.raises(ConfigError, match="Unsupported file format"):
            resolve_format("rds")

    @pytest.mark.parametrize("name, fmt", [
        ("db.csv", FileFormat.CSV),
        ("db.XLSX", FileFormat.XLSX),
        ("db.pkl", FileFormat.PICKLE),
        ("db.pkl.gz", FileFormat.PICKLE_GZ),
        ("db.pkl.bz2", FileFormat.PICKLE_BZ2),
        ("db.feather", FileFormat.FEATHER),
    ])
    def test_detect(self, name, fmt):
        assert detect_format(name) is fmt

    def test_detect_unknown(self):
        with pytest.raises(ConfigError):
            detect_format("db.json")

    def test_ensure_extension_appends(self):
        assert str(ensure_extension("out/db", "csv")) == "out/db.csv"
        assert str(ensure_extension("out/db", "pickle_gz")) == "out/db.pkl.gz"

    def test_ensure_extension_keeps_existing(self):
        assert str(ensure_extension("out/db.parquet", "parquet")) == "out/db.parquet"

    def test_segment_prefix(self):
        assert segment_prefix("CMJ-2:Trial 1") == "CMJ"
        assert segment_prefix("ISO:3") == "ISO"


class TestRoundTrip:
    @pytest.mark.parametrize("fmt", ["csv", "parquet", "feather"])
    def test_flat_formats(self, tests_df, tmp_path, fmt):
        path = write_tests(tests_df, tmp_path / "db", fmt)
        loaded = read_tests(path)

        assert path.name == "db" + FileFormat(fmt).extension
        assert loaded["id"].tolist() == ["t1", "t2", "t3"]
        assert loaded["athlete_teams"].tolist() == [["t1", "t2"]] * 3
        assert loaded["athlete_groups"].tolist() == [["g1"]] * 3
        assert loaded["jump_height_m"].tolist()[:2] == [0.41, 0.39]
        assert loaded["last_sync_time"].max() == 1700000500

    @pytest.mark.parametrize("fmt", ["pickle", "pickle_gz", "pickle_bz2", "pickle_xz"])
    def test_pickle_keeps_frame(self, tests_df, tmp_path, fmt):
        path = write_tests(tests_df, tmp_path / "db", fmt)
        loaded = read_tests(path)
        pd.testing.assert_frame_equal(loaded, tests_df)

    def test_csv_keeps_ids_as_text(self, tmp_path):
        df = pd.DataFrame({
            "id": ["001", "002"],
            "timestamp": [2, 1],
            "segment": ["CMJ:1", "CMJ:2"],
            "athlete_teams": [["t1"], []],
        })
        loaded = read_tests(write_tests(df, tmp_path / "db.csv", "csv"))
        assert loaded["id"].tolist() == ["001", "002"]
        assert loaded["athlete_teams"].tolist() == [["t1"], []]

    def test_xlsx_sheet_per_test_type(self, tests_df, tmp_path):
        path = write_tests(tests_df, tmp_path / "db", "xlsx")

        workbook = load_workbook(path)
        assert workbook.sheetnames == ["CMJ", "ISO"]
        cmj_header = [c.value for c in workbook["CMJ"][1]]
        iso_header = [c.value for c in workbook["ISO"][1]]
        assert "jump_height_m" in cmj_header and "peak_force_n" not in cmj_header
        assert "peak_force_n" in iso_header and "jump_height_m" not in iso_header

    def test_xlsx_read_concatenates_sheets(self, tests_df, tmp_path):
        loaded = read_tests(write_tests(tests_df, tmp_path / "db", "xlsx"))

        assert sorted(loaded["id"]) == ["t1", "t2", "t3"]
        assert loaded["timestamp"].tolist() == [1700000100, 1700000300, 1700000200]
        assert loaded["active"].tolist() == [True, True, False]
        assert loaded["athlete_teams"].tolist() == [["t1", "t2"]] * 3


def test_split_by_test_type_drops_empty_metrics(tests_df):
    sheets = split_by_test_type(tests_df)
    assert list(sheets) == ["CMJ", "ISO"]
    assert "peak_force_n" not in sheets["CMJ"].columns
    assert list(sheets["ISO"]["id"]) == ["t3"]


class TestSheetNames:
    def test_invalid_characters_replaced(self):
        assert sheet_name("Drop/Jump?", {}) == "Drop_Jump_"
        assert sheet_name("[Hop]*", {}) == "_Hop__"
        assert sheet_name("", {}) == "tests"

    def test_truncated_to_excel_limit(self):
        assert sheet_name("X" * 40, {}) == "X" * 31

    def test_collision_gets_suffix(self):
        taken = {"X" * 31: None}
        assert sheet_name("X" * 35, taken) == "X" * 29 + "_2"
        taken["X" * 29 + "_2"] = None
        assert sheet_name("X" * 36, taken) == "X" * 29 + "_3"

    def test_collision_ignores_case(self):
        assert sheet_name("cmj", {"CMJ": None}) == "cmj_2"

    def test_long_prefixes_keep_their_rows(self, tmp_path):
        long_a, long_b = "Y" * 31 + "A", "Y" * 31 + "B"
        df = trials_frame([
            make_trial("t1", 1700000200, segment=f"{long_a}:1", jump_height_m=0.4),
            make_trial("t2", 1700000100, segment=f"{long_b}:1", jump_height_m=0.3),
        ])

        sheets = split_by_test_type(df)
        assert list(sheets) == ["Y" * 31, "Y" * 29 + "_2"]
        assert [list(part["id"]) for part in sheets.values()] == [["t1"], ["t2"]]

        loaded = read_tests(write_tests(df, tmp_path / "db", "xlsx"))
        assert sorted(loaded["id"]) == ["t1", "t2"]

    def test_xlsx_with_invalid_prefix(self, tmp_path):
        df = trials_frame([make_trial("t1", 1700000200, segment="Drop/Jump?:1", jump_height_m=0.4)])

        path = write_tests(df, tmp_path / "db", "xlsx")

        assert load_workbook(path).sheetnames == ["Drop_Jump_"]
        assert read_tests(path)["id"].tolist() == ["t1"]
