"""Tests for record zone identifiers."""

import pytest
from pydantic import ValidationError

from cloudsync.zones import DEFAULT_ZONE_NAME, RecordZoneID


def test_default_zone():
    zone = RecordZoneID.default()
    assert zone.zone_name == DEFAULT_ZONE_NAME
    assert zone.to_dict() == {"zoneName": "_defaultZone"}


def test_owner_included_when_set():
    zone = RecordZoneID(zone_name="Inbox", owner_name="_abc")
    assert zone.to_dict() == {"zoneName": "Inbox", "ownerRecordName": "_abc"}


def test_zone_id_is_frozen():
    zone = RecordZoneID(zone_name="Inbox")
    with pytest.raises(ValidationError):
        zone.zone_name = "Other"
