"""
Shared pytest fixtures for Hawkin client testing.
"""
import time

import pytest

from hawkin_cloud.sdk.client import HawkinClient, Session

CMJ_ID = "7nNduHeM5zETPjHxvm7s"
ISO_ID = "2uS5XD5kXmWgIZ5HhQ3A"


def make_trial(trial_id, timestamp, active=True, canonical_id=CMJ_ID, segment="CMJ:1", tags=None, **metrics):
    """A raw trial as returned by the tests listing."""
    trial = {
        "id": trial_id,
        "active": active,
        "timestamp": timestamp,
        "segment": segment,
        "testType": {
            "id": canonical_id,
            "name": "Countermovement Jump" if canonical_id == CMJ_ID else "Isometric Test",
            "canonicalId": canonical_id,
            "tags": tags or [],
        },
        "athlete": {
            "id": "ath1",
            "name": "Jane Doe",
            "active": True,
            "teams": ["t1", "t2"],
            "groups": ["g1"],
            "external": {"sis": "123"},
        },
    }
    trial.update(metrics)
    return trial


def make_envelope(trials, last_sync_time=1700000500, last_test_time=1700000400):
    return {
        "data": trials,
        "count": len(trials),
        "lastSyncTime": last_sync_time,
        "lastTestTime": last_test_time,
    }


@pytest.fixture
def session():
    return Session(
        access_token="access_token",
        expires_at=int(time.time()) + 3600,
        base_url="https://cloud.hawkindynamics.com/api/dev",
    )


@pytest.fixture
def authed_client(session):
    """A client holding a session that expires in an hour."""
    return HawkinClient(session=session)


@pytest.fixture
def expired_client():
    return HawkinClient(session=Session(
        access_token="old_token",
        expires_at=int(time.time()) - 10,
        base_url="https://cloud.hawkindynamics.com/api/dev",
    ))


@pytest.fixture
def sample_trials():
    """Two CMJ trials and one inactive ISO trial."""
    return [
        make_trial(
            "t1", 1700000100, jump_height_m=0.41, peak_power_w=4000.0,
            tags=[{"id": "tag1", "name": "Pre", "description": "before"},
                  {"id": "tag2", "name": "Fatigued", "description": ""}],
        ),
        make_trial("t2", 1700000300, jump_height_m=0.39, peak_power_w=3900.0),
        make_trial(
            "t3", 1700000200, active=False, canonical_id=ISO_ID, segment="ISO-30:2",
            peak_force_n=2500.0,
        ),
    ]
