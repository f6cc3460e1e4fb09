"""
Subscription models and their wire dictionary serialization.

Two concrete variants exist:
- QuerySubscription: fires when records of a type matching a predicate change
- RecordZoneSubscription: fires on any change inside a record zone

Each variant carries its type tag as a class attribute, so the tag and the
variant cannot disagree. Plain ``Subscription`` instances only hold identity
(they come from parsing server acknowledgements) and serialize to ``{}``.
"""

from __future__ import annotations

import uuid
from enum import Enum, IntFlag
from typing import Any, ClassVar, Iterable, Mapping

import structlog

from .notifications import NotificationInfo
from .query import Predicate, Query
from .zones import RecordZoneID

log = structlog.get_logger()


class ParseError(ValueError):
    """Raised when a wire dictionary cannot be turned into a subscription."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key


class SubscriptionType(str, Enum):
    QUERY = "query"
    RECORD_ZONE = "zone"

    @classmethod
    def from_wire(cls, value: str) -> SubscriptionType:
        """Map a wire string to a type, falling back to QUERY for anything unknown."""
        if value == cls.RECORD_ZONE.value:
            return cls.RECORD_ZONE
        if value != cls.QUERY.value:
            log.warning("subscriptions.unknown_type", subscription_type=value)
        return cls.QUERY


class SubscriptionOptions(IntFlag):
    FIRES_ON_RECORD_CREATION = 1
    FIRES_ON_RECORD_UPDATE = 2
    FIRES_ON_RECORD_DELETION = 4
    FIRES_ONCE = 8

    @classmethod
    def from_fires_on(
        cls, fires_on: Iterable[str], fires_once: bool = False
    ) -> SubscriptionOptions:
        """Build options from wire trigger names (``create``/``update``/``delete``)."""
        by_name = {name: flag for flag, name in FIRES_ON_ORDER}
        options = cls(0)
        for name in fires_on:
            try:
                options |= by_name[name]
            except KeyError:
                raise ValueError(f"Unknown firesOn trigger: {name!r}") from None
        if fires_once:
            options |= cls.FIRES_ONCE
        return options

    @property
    def fires_once(self) -> bool:
        return SubscriptionOptions.FIRES_ONCE in self

    def fires_on_list(self) -> list[str]:
        """Trigger names for the set flags, always in create, update, delete order."""
        return [name for flag, name in FIRES_ON_ORDER if flag in self]


# Emission order of firesOn is part of the wire format.
FIRES_ON_ORDER: tuple[tuple[SubscriptionOptions, str], ...] = (
    (SubscriptionOptions.FIRES_ON_RECORD_CREATION, "create"),
    (SubscriptionOptions.FIRES_ON_RECORD_UPDATE, "update"),
    (SubscriptionOptions.FIRES_ON_RECORD_DELETION, "delete"),
)


def new_subscription_id() -> str:
    return str(uuid.uuid4())


class Subscription:
    """Identity and notification settings shared by every subscription."""

    def __init__(self, subscription_id: str, subscription_type: SubscriptionType | str):
        self._subscription_id = subscription_id
        self._subscription_type = SubscriptionType(subscription_type)
        self.notification_info: NotificationInfo | None = None

    @property
    def subscription_id(self) -> str:
        return self._subscription_id

    @property
    def subscription_type(self) -> SubscriptionType:
        return self._subscription_type

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Subscription:
        """
        Rebuild the identity of a subscription from a server response item.

        Only ``subscriptionID`` and ``subscriptionType`` are read; the result is
        a plain ``Subscription`` even when the item describes a concrete variant.
        """
        subscription_id = data.get("subscriptionID")
        if not isinstance(subscription_id, str) or not subscription_id:
            raise ParseError("subscriptionID must be a non-empty string", key="subscriptionID")

        type_value = data.get("subscriptionType")
        if not isinstance(type_value, str):
            raise ParseError("subscriptionType must be a string", key="subscriptionType")

        return Subscription(subscription_id, SubscriptionType.from_wire(type_value))

    def to_dict(self) -> dict[str, Any]:
        return subscription_to_dict(self)

    def _variant_fields(self) -> dict[str, Any] | None:
        # Identity-only subscriptions have nothing the service could accept.
        return None

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(subscription_id={self._subscription_id!r}, "
            f"subscription_type={self._subscription_type.value!r})"
        )


class QuerySubscription(Subscription):
    kind: ClassVar[SubscriptionType] = SubscriptionType.QUERY

    def __init__(
        self,
        record_type: str,
        predicate: Predicate,
        subscription_id: str | None = None,
        *,
        options: SubscriptionOptions,
    ):
        if subscription_id is None:
            subscription_id = new_subscription_id()
        super().__init__(subscription_id, self.kind)
        self._record_type = record_type
        self._options = SubscriptionOptions(options)
        self.predicate = predicate
        # Scoping is modelled but not part of the query payload.
        self.zone_id: RecordZoneID | None = None

    @property
    def record_type(self) -> str:
        return self._record_type

    @property
    def options(self) -> SubscriptionOptions:
        return self._options

    def _variant_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "query": Query(record_type=self._record_type, predicate=self.predicate).to_dict(),
            "firesOn": self._options.fires_on_list(),
        }
        if self._options.fires_once:
            fields["firesOnce"] = True
        return fields


class RecordZoneSubscription(Subscription):
    kind: ClassVar[SubscriptionType] = SubscriptionType.RECORD_ZONE

    def __init__(self, zone_id: RecordZoneID, subscription_id: str | None = None):
        if subscription_id is None:
            subscription_id = new_subscription_id()
        super().__init__(subscription_id, self.kind)
        self._zone_id = zone_id
        self.record_type: str | None = None

    @property
    def zone_id(self) -> RecordZoneID:
        return self._zone_id

    def _variant_fields(self) -> dict[str, Any]:
        return {"zoneID": self._zone_id.to_dict()}


def subscription_to_dict(subscription: Subscription) -> dict[str, Any]:
    """
    Serialize a subscription to its wire dictionary.

    Optional keys (``firesOnce``, ``notificationInfo``) are only present when
    set. Identity-only subscriptions yield an empty dict.
    """
    fields = subscription._variant_fields()
    if fields is None:
        return {}

    payload: dict[str, Any] = {
        "subscriptionID": subscription.subscription_id,
        "subscriptionType": subscription.subscription_type.value,
    }
    payload.update(fields)
    if subscription.notification_info is not None:
        payload["notificationInfo"] = subscription.notification_info.to_dict()
    return payload
