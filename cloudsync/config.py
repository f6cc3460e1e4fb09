"""
Configuration loading and validation.

Loads the container description, logging settings and declared subscriptions
from a YAML file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from .notifications import NotificationInfo
from .query import Comparator, Filter, Predicate
from .subscriptions import (
    QuerySubscription,
    RecordZoneSubscription,
    Subscription,
    SubscriptionOptions,
)
from .zones import DEFAULT_ZONE_NAME, RecordZoneID


class ContainerConfig(BaseModel):
    identifier: str
    environment: Literal["development", "production"] = "development"
    database: Literal["public", "private", "shared"] = "private"


class LoggingConfig(BaseModel):
    level: str = "info"
    format: Literal["json", "text"] = "json"

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level_number(v)
        return v.lower()


def level_number(level: str) -> int:
    """Map a level name such as ``"info"`` to its numeric value."""
    number = logging.getLevelName(level.upper())
    if not isinstance(number, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return number


class NotificationConfig(BaseModel):
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

    def to_notification_info(self) -> NotificationInfo:
        return NotificationInfo(**self.model_dump())


class ZoneConfig(BaseModel):
    name: str = DEFAULT_ZONE_NAME
    owner: Optional[str] = None

    def to_zone_id(self) -> RecordZoneID:
        return RecordZoneID(zone_name=self.name, owner_name=self.owner)


class FilterConfig(BaseModel):
    field: str
    comparator: Comparator = Comparator.EQUALS
    value: Any

    def to_filter(self) -> Filter:
        return Filter(self.comparator, self.field, self.value)


class _SubscriptionConfigBase(BaseModel):
    id: Optional[str] = None
    notification: Optional[NotificationConfig] = None

    def _attach_notification(self, subscription: Subscription) -> Subscription:
        if self.notification is not None:
            subscription.notification_info = self.notification.to_notification_info()
        return subscription


class QuerySubscriptionConfig(_SubscriptionConfigBase):
    kind: Literal["query"]
    record_type: str
    filters: list[FilterConfig] = Field(default_factory=list)
    fires_on: list[Literal["create", "update", "delete"]] = Field(
        default_factory=lambda: ["create", "update", "delete"]
    )
    fires_once: bool = False
    zone: Optional[ZoneConfig] = None

    def build(self) -> QuerySubscription:
        subscription = QuerySubscription(
            record_type=self.record_type,
            predicate=Predicate.where(*(f.to_filter() for f in self.filters)),
            subscription_id=self.id,
            options=SubscriptionOptions.from_fires_on(self.fires_on, self.fires_once),
        )
        if self.zone is not None:
            subscription.zone_id = self.zone.to_zone_id()
        self._attach_notification(subscription)
        return subscription


class ZoneSubscriptionConfig(_SubscriptionConfigBase):
    kind: Literal["zone"]
    zone: ZoneConfig = Field(default_factory=ZoneConfig)
    record_type: Optional[str] = None

    def build(self) -> RecordZoneSubscription:
        subscription = RecordZoneSubscription(self.zone.to_zone_id(), subscription_id=self.id)
        subscription.record_type = self.record_type
        self._attach_notification(subscription)
        return subscription


SubscriptionConfig = Annotated[
    Union[QuerySubscriptionConfig, ZoneSubscriptionConfig],
    Field(discriminator="kind"),
]


class CloudSyncConfig(BaseModel):
    container: ContainerConfig
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    subscriptions: list[SubscriptionConfig] = Field(default_factory=list)

    def build_subscriptions(self) -> list[Subscription]:
        return [s.build() for s in self.subscriptions]


def load_config(path: str | Path) -> CloudSyncConfig:
    """Load and validate configuration from a YAML file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    return CloudSyncConfig.model_validate(raw)
