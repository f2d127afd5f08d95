import pytest


@pytest.fixture
def target():
    from ..errors import ErrorSerializer

    return ErrorSerializer()


def test_single(target):
    result = target(
        {
            "status": 422,
            "title": "Invalid Attribute",
            "detail": "First name must contain at least three characters.",
            "source": {"pointer": "/data/attributes/first-name"},
            "code": "",
        }
    )
    assert result == {
        "errors": [
            {
                "status": "422",
                "title": "Invalid Attribute",
                "detail": "First name must contain at least three characters.",
                "source": {"pointer": "/data/attributes/first-name"},
            },
        ],
    }


def test_many(target):
    result = target(
        [
            {"id": "a", "links": {"about": "/errors/a"}, "meta": {"retry": False}},
            {"code": "E2", "source": {"parameter": "include"}},
            {"source": {"pointer": ""}},
        ]
    )
    assert result == {
        "errors": [
            {"id": "a", "links": {"about": "/errors/a"}, "meta": {"retry": False}},
            {"code": "E2", "source": {"parameter": "include"}},
            {},
        ],
    }


def test_empty(target):
    assert target() == {"errors": []}
    assert target([]) == {"errors": []}


class TestJSONAPIError:
    @pytest.fixture
    def target_class(self):
        from ..errors import JSONAPIError

        return JSONAPIError

    def test_to_dict(self, target_class):
        e = target_class(
            status=409,
            detail="already exists",
            code="conflict",
            source_pointer="/data/id",
            links_about="/docs/conflict",
            meta={"id": "1"},
        )
        assert e.status == 409
        assert str(e) == "already exists"
        assert e.to_dict() == {
            "status": "409",
            "title": "Conflict",
            "detail": "already exists",
            "code": "conflict",
            "source": {"pointer": "/data/id"},
            "links": {"about": "/docs/conflict"},
            "meta": {"id": "1"},
        }

    def test_defaults(self, target_class):
        e = target_class()
        assert e.to_dict() == {"status": "500", "title": "Internal Server Error"}
        assert str(e) == "Internal Server Error"

    def test_unknown_status(self, target_class):
        e = target_class(status=499)
        assert e.to_dict() == {"status": "499"}
        assert str(e) == "499"

    def test_not_found(self):
        from ..errors import NotFoundError

        e = NotFoundError(detail="no user 1", source_parameter="id")
        assert isinstance(e, Exception)
        assert e.status == 404
        assert e.to_dict() == {
            "status": "404",
            "title": "Not Found",
            "detail": "no user 1",
            "source": {"parameter": "id"},
        }
