"""Record zone identifiers as referenced by subscriptions."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

DEFAULT_ZONE_NAME = "_defaultZone"


class RecordZoneID(BaseModel):
    """Identifies a record zone, optionally owned by another user."""

    model_config = ConfigDict(frozen=True)

    zone_name: str = DEFAULT_ZONE_NAME
    owner_name: Optional[str] = None

    @classmethod
    def default(cls) -> RecordZoneID:
        return cls()

    def to_dict(self) -> dict[str, Any]:
        zone: dict[str, Any] = {"zoneName": self.zone_name}
        if self.owner_name is not None:
            zone["ownerRecordName"] = self.owner_name
        return zone
