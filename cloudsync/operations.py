"""
Request bodies and response parsing for the subscription endpoints.

Covers ``subscriptions/modify``, ``subscriptions/lookup`` and
``subscriptions/list``. Only wire dictionaries are produced and consumed here;
sending them is left to the caller's HTTP client.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Union

import structlog

from .subscriptions import ParseError, Subscription, subscription_to_dict

if TYPE_CHECKING:
    from .config import ContainerConfig

log = structlog.get_logger()

API_VERSION = 1


class ModifyOperationType(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class SubscriptionEndpoint(str, Enum):
    MODIFY = "modify"
    LOOKUP = "lookup"
    LIST = "list"


@dataclass
class SubscriptionError:
    """A per-item failure reported by the service."""

    subscription_id: str | None
    server_error_code: str
    reason: str | None = None


@dataclass
class SubscriptionResults:
    subscriptions: list[Subscription] = field(default_factory=list)
    errors: list[SubscriptionError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def endpoint_path(container: ContainerConfig, endpoint: SubscriptionEndpoint | str) -> str:
    endpoint = SubscriptionEndpoint(endpoint)
    return (
        f"/database/{API_VERSION}/{container.identifier}/{container.environment}"
        f"/{container.database}/subscriptions/{endpoint.value}"
    )


def _save_operation(op: ModifyOperationType, subscription: Subscription) -> dict[str, Any]:
    payload = subscription_to_dict(subscription)
    if not payload:
        raise ValueError(
            f"Cannot {op.value} subscription {subscription.subscription_id!r}: "
            "it has no variant fields to send"
        )
    return {"operationType": op.value, "subscription": payload}


def modify_request(
    creates: Iterable[Subscription] = (),
    updates: Iterable[Subscription] = (),
    deletes: Iterable[Union[Subscription, str]] = (),
) -> dict[str, Any]:
    """Build a ``subscriptions/modify`` body: creates, then updates, then deletes."""
    operations = [_save_operation(ModifyOperationType.CREATE, s) for s in creates]
    operations += [_save_operation(ModifyOperationType.UPDATE, s) for s in updates]
    for item in deletes:
        subscription_id = item.subscription_id if isinstance(item, Subscription) else item
        operations.append(
            {
                "operationType": ModifyOperationType.DELETE.value,
                "subscription": {"subscriptionID": subscription_id},
            }
        )
    log.debug("operations.modify_request", operations=len(operations))
    return {"operations": operations}


def lookup_request(subscription_ids: Iterable[str]) -> dict[str, Any]:
    return {"subscriptions": [{"subscriptionID": sid} for sid in subscription_ids]}


def parse_subscriptions_response(data: Mapping[str, Any]) -> SubscriptionResults:
    """
    Split a modify/lookup/list response into subscriptions and item errors.

    Items carrying ``serverErrorCode`` become ``SubscriptionError`` entries.
    Everything else must parse as a subscription; ``ParseError`` propagates.
    """
    items = data.get("subscriptions")
    if not isinstance(items, list):
        raise ParseError("subscriptions must be a list", key="subscriptions")

    results = SubscriptionResults()
    for item in items:
        if not isinstance(item, Mapping):
            raise ParseError("subscription entry must be an object", key="subscriptions")
        if "serverErrorCode" in item:
            error = SubscriptionError(
                subscription_id=item.get("subscriptionID"),
                server_error_code=str(item["serverErrorCode"]),
                reason=item.get("reason"),
            )
            log.warning(
                "operations.subscription_error",
                subscription_id=error.subscription_id,
                code=error.server_error_code,
                reason=error.reason,
            )
            results.errors.append(error)
        else:
            results.subscriptions.append(Subscription.from_dict(item))
    return results
