"""Tests for the minimal query model."""

import pytest
from pydantic import ValidationError

from cloudsync.query import Comparator, Filter, Predicate, Query, field_value_type


def test_query_without_filters_omits_filter_by():
    assert Query(record_type="Note").to_dict() == {"recordType": "Note"}


def test_query_with_filters(predicate):
    query = Query(record_type="Task", predicate=predicate.and_(Filter("GREATER_THAN", "priority", 2)))
    assert query.to_dict() == {
        "recordType": "Task",
        "filterBy": [
            {
                "comparator": "EQUALS",
                "fieldName": "status",
                "fieldValue": {"value": "open", "type": "STRING"},
            },
            {
                "comparator": "GREATER_THAN",
                "fieldName": "priority",
                "fieldValue": {"value": 2, "type": "INT64"},
            },
        ],
    }


@pytest.mark.parametrize(
    "value, expected",
    [
        ("a", "STRING"),
        (3, "INT64"),
        (True, "INT64"),
        (1.5, "DOUBLE"),
        (["a", "b"], "STRING_LIST"),
        ([1, 2], "INT64_LIST"),
        ([1, 2.5], "DOUBLE_LIST"),
        ([True, False], "INT64_LIST"),
    ],
)
def test_field_value_type(value, expected):
    assert field_value_type(value) == expected


def test_bool_value_sent_as_integer():
    f = Filter(Comparator.EQUALS, "done", True)
    assert f.to_dict()["fieldValue"] == {"value": 1, "type": "INT64"}


def test_bool_list_sent_as_integers():
    f = Filter(Comparator.IN_, "flags", [True, False])
    field_value = f.to_dict()["fieldValue"]
    assert field_value == {"value": [1, 0], "type": "INT64_LIST"}
    assert all(type(v) is int for v in field_value["value"])


def test_mixed_number_list_widens_to_doubles():
    f = Filter(Comparator.IN_, "scores", [1, 2.5])
    field_value = f.to_dict()["fieldValue"]
    assert field_value == {"value": [1.0, 2.5], "type": "DOUBLE_LIST"}
    assert all(type(v) is float for v in field_value["value"])


def test_unsupported_value_rejected():
    with pytest.raises(ValidationError):
        Filter(Comparator.EQUALS, "when", object())
    with pytest.raises(ValidationError):
        Filter(Comparator.IN_, "mixed", ["a", 1])


def test_predicate_and_returns_new_predicate(predicate):
    extended = predicate.and_(Filter(Comparator.EQUALS, "owner", "me"))
    assert len(predicate.filters) == 1
    assert len(extended.filters) == 2
    assert Predicate().matches_all
