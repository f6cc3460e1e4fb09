"""
Minimal query model embedded in query subscriptions.

Only the parts a subscription needs on the wire are modelled: a record type
and a conjunction of field filters. Sorting, cursors and result limits belong
to the full query API and are not represented here.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Comparator(str, Enum):
    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    LESS_THAN = "LESS_THAN"
    LESS_THAN_OR_EQUALS = "LESS_THAN_OR_EQUALS"
    GREATER_THAN = "GREATER_THAN"
    GREATER_THAN_OR_EQUALS = "GREATER_THAN_OR_EQUALS"
    IN_ = "IN"
    NOT_IN = "NOT_IN"
    BEGINS_WITH = "BEGINS_WITH"
    NOT_BEGINS_WITH = "NOT_BEGINS_WITH"
    CONTAINS_ANY = "CONTAINS_ANY"
    CONTAINS_ALL = "CONTAINS_ALL"


def _scalar_type(value: Any) -> str | None:
    # bool is an int subclass; the service has no boolean field type
    if isinstance(value, (bool, int)):
        return "INT64"
    if isinstance(value, float):
        return "DOUBLE"
    if isinstance(value, str):
        return "STRING"
    return None


def field_value_type(value: Any) -> str:
    """Infer the wire field type for a filter value."""
    if isinstance(value, (list, tuple)):
        element_types = {_scalar_type(v) for v in value}
        # mixed integer/float lists widen to doubles
        if element_types == {"INT64", "DOUBLE"}:
            return "DOUBLE_LIST"
        if len(element_types) == 1 and None not in element_types:
            return f"{element_types.pop()}_LIST"
        raise ValueError(f"Unsupported list filter value: {value!r}")
    scalar = _scalar_type(value)
    if scalar is None:
        raise ValueError(f"Unsupported filter value type: {type(value).__name__}")
    return scalar


def _coerce(value: Any, wire_type: str) -> Any:
    if wire_type.startswith("DOUBLE"):
        return float(value)
    if isinstance(value, bool):
        return int(value)
    return value


def field_value(value: Any) -> dict[str, Any]:
    """Wire ``fieldValue`` object, with values converted to match the inferred type."""
    wire_type = field_value_type(value)
    if isinstance(value, (list, tuple)):
        wire_value: Any = [_coerce(v, wire_type) for v in value]
    else:
        wire_value = _coerce(value, wire_type)
    return {"value": wire_value, "type": wire_type}


class Filter(BaseModel):
    """A single field comparison, e.g. ``Filter(EQUALS, "status", "open")``."""

    model_config = ConfigDict(frozen=True)

    comparator: Comparator
    field_name: str
    value: Any

    def __init__(self, comparator: Comparator | str, field_name: str, value: Any, **data: Any):
        super().__init__(comparator=comparator, field_name=field_name, value=value, **data)

    @field_validator("value")
    @classmethod
    def _check_value(cls, v: Any) -> Any:
        field_value_type(v)
        if isinstance(v, tuple):
            return list(v)
        return v

    def to_dict(self) -> dict[str, Any]:
        return {
            "comparator": self.comparator.value,
            "fieldName": self.field_name,
            "fieldValue": field_value(self.value),
        }


class Predicate(BaseModel):
    """Ordered conjunction of filters. An empty predicate matches every record."""

    model_config = ConfigDict(frozen=True)

    filters: tuple[Filter, ...] = Field(default_factory=tuple)

    @classmethod
    def where(cls, *filters: Filter) -> Predicate:
        return cls(filters=filters)

    def and_(self, *filters: Filter) -> Predicate:
        return Predicate(filters=self.filters + filters)

    @property
    def matches_all(self) -> bool:
        return not self.filters


class Query(BaseModel):
    model_config = ConfigDict(frozen=True)

    record_type: str
    predicate: Predicate = Field(default_factory=Predicate)

    def to_dict(self) -> dict[str, Any]:
        query: dict[str, Any] = {"recordType": self.record_type}
        if not self.predicate.matches_all:
            query["filterBy"] = [f.to_dict() for f in self.predicate.filters]
        return query
