"""
Push notification settings attached to a subscription.

The model is write-only: it is serialized into the subscription payload and
never read back from server responses.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

# Wire key for each optional field, in emission order.
# desired_keys and category are modelled but not part of the payload yet.
NOTIFICATION_INFO_KEYS: dict[str, str] = {
    "alert_body": "alertBody",
    "alert_localization_key": "alertLocalizationKey",
    "alert_localization_args": "alertLocalizationArgs",
    "alert_action_localization_key": "alertActionLocalizationKey",
    "alert_launch_image": "alertLaunchImage",
    "sound_name": "soundName",
}


class NotificationInfo(BaseModel):
    """How a client is alerted when a subscription fires."""

    model_config = ConfigDict(validate_assignment=True)

    alert_body: Optional[str] = None
    alert_localization_key: Optional[str] = None
    alert_localization_args: Optional[list[str]] = None
    alert_action_localization_key: Optional[str] = None
    alert_launch_image: Optional[str] = None
    sound_name: Optional[str] = None
    desired_keys: Optional[list[str]] = None
    should_badge: bool = False
    should_send_content_available: bool = False
    category: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        info: dict[str, Any] = {}
        for field_name, key in NOTIFICATION_INFO_KEYS.items():
            value = getattr(self, field_name)
            if value is None:
                continue
            info[key] = list(value) if isinstance(value, list) else value
        info["shouldBadge"] = self.should_badge
        info["shouldSendContentAvailable"] = self.should_send_content_available
        return info
