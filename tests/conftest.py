"""
Shared fixtures for subscription tests.
"""

import pytest
import structlog

from cloudsync.query import Comparator, Filter, Predicate
from cloudsync.zones import RecordZoneID


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def zone_id():
    return RecordZoneID(zone_name="Inbox", owner_name="_owner_1")


@pytest.fixture
def predicate():
    return Predicate.where(Filter(Comparator.EQUALS, "status", "open"))


@pytest.fixture
def config_dict():
    return {
        "container": {
            "identifier": "iCloud.com.example.notes",
            "environment": "production",
            "database": "private",
        },
        "logging": {"level": "debug", "format": "text"},
        "subscriptions": [
            {
                "kind": "query",
                "id": "open-tasks",
                "record_type": "Task",
                "filters": [{"field": "status", "value": "open"}],
                "fires_on": ["update", "create"],
                "fires_once": True,
                "notification": {"alert_body": "Task changed", "should_badge": True},
            },
            {
                "kind": "zone",
                "id": "inbox-zone",
                "zone": {"name": "Inbox"},
            },
        ],
    }
