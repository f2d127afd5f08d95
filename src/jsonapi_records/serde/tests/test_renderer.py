import datetime
import decimal
import uuid

import pytest


@pytest.fixture
def target_class():
    from ..renderer import ReprRenderer

    return ReprRenderer


def test_singleton(target_class):
    from ..models import (
        LinkageRepr,
        ResourceIdRepr,
        ResourceRepr,
        SingletonDocumentRepr,
    )

    target = target_class()

    result = target(
        SingletonDocumentRepr(
            links={"self": "/users/1"},
            data=ResourceRepr(
                type="users",
                id="1",
                attributes=[
                    ("first-name", "Sandro"),
                    ("last-name", "Munda"),
                ],
                relationships=[
                    (
                        "address",
                        LinkageRepr(
                            links={"related": "/addresses/2"},
                            data=ResourceIdRepr(type="addresses", id="2"),
                        ),
                    ),
                    (
                        "books",
                        LinkageRepr(
                            data=[
                                ResourceIdRepr(type="books", id="1"),
                                ResourceIdRepr(type="books", id="2"),
                            ],
                        ),
                    ),
                ],
            ),
        ),
    )
    assert result == {
        "links": {"self": "/users/1"},
        "data": {
            "type": "users",
            "id": "1",
            "attributes": {
                "first-name": "Sandro",
                "last-name": "Munda",
            },
            "relationships": {
                "address": {
                    "links": {"related": "/addresses/2"},
                    "data": {"type": "addresses", "id": "2"},
                },
                "books": {
                    "data": [
                        {"type": "books", "id": "1"},
                        {"type": "books", "id": "2"},
                    ],
                },
            },
        },
    }


def test_collection(target_class):
    from ..models import CollectionDocumentRepr, ResourceRepr

    target = target_class()

    result = target(
        CollectionDocumentRepr(
            data=[
                ResourceRepr(type="users", id="1", attributes=[("name", "a")]),
                ResourceRepr(type="users", id="2", attributes=[("name", "b")]),
            ],
            included=[
                ResourceRepr(type="books", id="1", attributes=[("title", "c")]),
            ],
            meta={"count": 2},
        )
    )
    assert result == {
        "data": [
            {"type": "users", "id": "1", "attributes": {"name": "a"}},
            {"type": "users", "id": "2", "attributes": {"name": "b"}},
        ],
        "meta": {"count": 2},
        "included": [
            {"type": "books", "id": "1", "attributes": {"title": "c"}},
        ],
    }


def test_null_data(target_class):
    from ..models import SingletonDocumentRepr

    assert target_class()(SingletonDocumentRepr()) == {"data": None}


def test_relationship_without_data(target_class):
    from ..models import LinkageRepr, ResourceIdRepr, ResourceRepr, SingletonDocumentRepr

    result = target_class()(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="users",
                id="1",
                relationships=[
                    ("address", LinkageRepr(links={"related": "/x"})),
                    ("car", LinkageRepr(data=None)),
                    ("books", LinkageRepr(data=[])),
                    (
                        "pet",
                        LinkageRepr(data=ResourceIdRepr(type="pets", id="3", meta={"a": 1})),
                    ),
                ],
            )
        )
    )
    assert result["data"]["relationships"] == {
        "address": {"links": {"related": "/x"}},
        "car": {"data": None},
        "books": {"data": []},
        "pet": {"data": {"type": "pets", "id": "3", "meta": {"a": 1}}},
    }


def test_scalars(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    result = target_class()(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="foos",
                id="1",
                attributes=[
                    (
                        "at",
                        datetime.datetime(2020, 1, 1, 9, 0, 0, tzinfo=datetime.timezone.utc),
                    ),
                    ("on", datetime.date(2020, 1, 2)),
                    ("price", decimal.Decimal("1.50")),
                    ("blob", b"\x00\x01"),
                    ("nested", {"values": [1, {"b": decimal.Decimal("2")}]}),
                ],
            )
        )
    )
    assert result["data"]["attributes"] == {
        "at": "2020-01-01T09:00:00+00:00",
        "on": "2020-01-02",
        "price": "1.50",
        "blob": "AAE=",
        "nested": {"values": [1, {"b": "2"}]},
    }


def test_decimal_as_float(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    result = target_class(render_decimal_as_str=False)(
        SingletonDocumentRepr(
            data=ResourceRepr(type="foos", id="1", attributes=[("a", decimal.Decimal("0.5"))])
        )
    )
    assert result["data"]["attributes"] == {"a": 0.5}


def test_naive_datetime(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    repr_ = SingletonDocumentRepr(
        data=ResourceRepr(
            type="foos",
            id="1",
            attributes=[("a", datetime.datetime(2020, 1, 1, 0, 0, 0))],
        )
    )
    result = target_class()(repr_)
    assert result["data"]["attributes"] == {"a": "2020-01-01T00:00:00"}

    result = target_class(assume_naive_timezone_as=datetime.timezone(datetime.timedelta(hours=9)))(
        repr_
    )
    assert result["data"]["attributes"] == {"a": "2019-12-31T15:00:00+00:00"}


def test_unknown_scalars_pass_through(target_class):
    from ..models import ResourceRepr, SingletonDocumentRepr

    value = uuid.UUID(int=1)
    sentinel = object()
    result = target_class()(
        SingletonDocumentRepr(
            data=ResourceRepr(
                type="foos", id="1", attributes=[("a", {"b": sentinel}), ("c", [value])]
            )
        )
    )
    assert result["data"]["attributes"]["a"]["b"] is sentinel
    assert result["data"]["attributes"]["c"] == [value]


def test_errors(target_class):
    from ..models import ErrorDocumentRepr, ErrorRepr, SourceRepr

    result = target_class()(
        ErrorDocumentRepr(
            errors=[
                ErrorRepr(
                    status="422",
                    title="Unprocessable Entity",
                    source=SourceRepr(pointer="/data/attributes/name"),
                ),
            ]
        )
    )
    assert result == {
        "errors": [
            {
                "status": "422",
                "title": "Unprocessable Entity",
                "source": {"pointer": "/data/attributes/name"},
            }
        ]
    }
    assert target_class()(ErrorDocumentRepr(errors=[])) == {"errors": []}
