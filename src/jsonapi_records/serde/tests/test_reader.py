import pytest

from ...exceptions import DeserializationError
from ...utils import UNDEFINED, JSONPointer
from ..models import (
    CollectionDocumentRepr,
    LinkageRepr,
    ResourceIdRepr,
    ResourceRepr,
    SingletonDocumentRepr,
)


@pytest.fixture
def target():
    from ..reader import DocumentReader

    return DocumentReader()


def test_basic(target):
    result = target(
        {
            "links": {"self": "/users/1"},
            "data": {
                "type": "users",
                "id": "1",
                "attributes": {"first-name": "Sandro"},
                "relationships": {
                    "address": {"data": {"type": "addresses", "id": "2"}},
                },
            },
        }
    )
    assert result == SingletonDocumentRepr(
        links={"self": "/users/1"},
        data=ResourceRepr(
            type="users",
            id="1",
            attributes=[("first-name", "Sandro")],
            relationships=[
                (
                    "address",
                    LinkageRepr(
                        data=ResourceIdRepr(
                            type="addresses",
                            id="2",
                            _source_=JSONPointer("/data/relationships/address/data"),
                        ),
                        _source_=JSONPointer("/data/relationships/address"),
                    ),
                ),
            ],
            _source_=JSONPointer("/data"),
        ),
        _source_=JSONPointer("/"),
    )


def test_collection_and_included(target):
    result = target(
        {
            "data": [
                {"type": "users", "id": "1"},
                {"type": "users", "id": "2"},
            ],
            "included": [
                {"type": "books", "id": "3", "attributes": {"title": "x"}},
            ],
        }
    )
    assert isinstance(result, CollectionDocumentRepr)
    assert [r.id for r in result.data] == ["1", "2"]
    assert len(result.included) == 1
    assert result.included[0].attributes == {"title": "x"}
    assert result.included[0]._source_ == JSONPointer("/included/0")


def test_linkage_variants(target):
    result = target(
        {
            "data": {
                "type": "users",
                "id": 1,
                "relationships": {
                    "address": {"links": {"related": "/users/1/address"}},
                    "car": {"data": None},
                    "books": {"data": []},
                },
            },
        }
    )
    assert isinstance(result, SingletonDocumentRepr)
    assert result.data is not None
    # ids are kept as they appear in the document
    assert result.data.id == 1
    rels = result.data.relationships
    assert rels["address"].data is UNDEFINED
    assert not rels["address"].has_data
    assert rels["car"].has_data and rels["car"].data is None
    assert rels["books"].is_to_many and rels["books"].data == ()


def test_null_data(target):
    result = target({"data": None, "meta": {"count": 0}})
    assert isinstance(result, SingletonDocumentRepr)
    assert result.data is None
    assert result.meta == {"count": 0}


@pytest.mark.parametrize(
    ("document", "pointers"),
    [
        ([], ["/"]),
        ({}, ["/"]),
        ({"data": {"id": "1"}}, ["/data"]),
        ({"data": {"type": 1, "id": "1"}}, ["/data/type"]),
        ({"data": [{"type": "users"}, "x"]}, ["/data/1"]),
        ({"data": None, "included": {}}, ["/included"]),
        (
            {"data": {"type": "users", "relationships": {"a": {"data": {"id": "1"}}}}},
            ["/data/relationships/a/data"],
        ),
    ],
)
def test_validation_error(target, document, pointers):
    with pytest.raises(DeserializationError) as e:
        target(document)
    assert [str(item.pointer) for item in e.value.errors] == pointers
    assert e.value.payload is document
