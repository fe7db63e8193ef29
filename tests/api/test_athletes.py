"""Tests for api/athletes.py: roster listing and bulk writes."""

import pandas as pd
import pytest
from unittest.mock import patch

from hawkin_cloud.api.athletes import create_athletes, get_athletes, update_athletes
from hawkin_cloud.sdk.exceptions import ValidationError


@patch("hawkin_cloud.api.athletes.sdk_athletes")
def test_get_athletes(mock_sdk):
    mock_sdk.get_athletes.return_value = {
        "data": [
            {"id": "a1", "name": "Jane", "active": True, "teams": ["t1", "t2"],
             "groups": [], "external": {"sis": "9", "gps": None}},
            {"id": "a2", "name": "John", "active": True, "teams": [], "groups": ["g1"],
             "external": {}},
        ],
        "count": 2,
    }

    df = get_athletes(object(), include_inactive=True)

    assert list(df.columns) == ["id", "name", "active", "teams", "groups", "external"]
    assert df.loc[0, "teams"] == "t1,t2"
    assert df.loc[0, "groups"] is None
    assert df.loc[0, "external"] == "sis:9"
    assert df.loc[1, "external"] is None
    mock_sdk.get_athletes.assert_called_once()
    assert mock_sdk.get_athletes.call_args.kwargs["include_inactive"] is True


@patch("hawkin_cloud.api.athletes.sdk_athletes")
def test_get_athletes_empty(mock_sdk):
    mock_sdk.get_athletes.return_value = {"data": [], "count": 0}
    df = get_athletes(object())
    assert df.empty


@patch("hawkin_cloud.api.athletes.sdk_athletes")
def test_create_athletes_payload(mock_sdk):
    mock_sdk.create_athletes.return_value = {
        "data": [{"id": "new1", "name": "Jane"}],
        "failures": [],
    }
    athletes = pd.DataFrame([
        {"name": "Jane", "teams": "t1,t2", "active": True, "sis": "123"},
    ])

    summary = create_athletes(object(), athletes)

    payload = mock_sdk.create_athletes.call_args[0][1]
    assert payload == [{
        "name": "Jane", "active": True, "teams": ["t1", "t2"], "external": {"sis": "123"},
    }]
    assert summary == {"succeeded": ["Jane"], "failures": []}


@patch("hawkin_cloud.api.athletes.sdk_athletes")
def test_create_athletes_requires_name(mock_sdk):
    with pytest.raises(ValidationError, match="name"):
        create_athletes(object(), [{"teams": "t1"}])
    mock_sdk.create_athletes.assert_not_called()


@patch("hawkin_cloud.api.athletes.sdk_athletes")
def test_update_athletes_requires_id(mock_sdk):
    with pytest.raises(ValidationError, match="id"):
        update_athletes(object(), [{"name": "Jane"}])
    mock_sdk.update_athletes.assert_not_called()


@patch("hawkin_cloud.api.athletes.sdk_athletes")
def test_update_athletes_groups_failures(mock_sdk):
    mock_sdk.update_athletes.return_value = {
        "data": [{"id": "a1", "name": "Jane"}],
        "failures": [
            {"reason": "Athlete not found", "data": {"name": "Ghost"}},
            {"reason": "Athlete not found", "data": {"name": "Phantom"}},
            {"reason": "Invalid team", "data": {"name": "John"}},
        ],
        "hasFailures": True,
    }

    summary = update_athletes(object(), [
        {"id": "a1", "name": "Jane", "external": {"sis": "1"}},
        {"id": "x1", "name": "Ghost"},
    ])

    payload = mock_sdk.update_athletes.call_args[0][1]
    assert payload[0] == {"id": "a1", "name": "Jane", "external": {"sis": "1"}}
    assert payload[1] == {"id": "x1", "name": "Ghost", "external": {}}
    assert summary["succeeded"] == ["Jane"]
    assert summary["failures"] == [
        {"reason": "Athlete not found", "names": ["Ghost", "Phantom"]},
        {"reason": "Invalid team", "names": ["John"]},
    ]
