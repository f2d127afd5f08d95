import pytest

from ..exceptions import InvalidConfigurationError


@pytest.mark.parametrize(
    ("name", "case", "expected"),
    [
        ("firstName", None, "first-name"),
        ("addressLine1", "dash-case", "address-line1"),
        ("first_name", "lisp-case", "first-name"),
        ("first_name", "spinal-case", "first-name"),
        ("first_name", "kebab-case", "first-name"),
        ("firstName", "underscore_case", "first_name"),
        ("first-name", "snake_case", "first_name"),
        ("first-name", "CamelCase", "FirstName"),
        ("first-name", "camelCase", "firstName"),
        ("first_name", "camelCase", "firstName"),
    ],
)
def test_caserize(name, case, expected):
    from ..naming import KeyCase, caserize

    assert caserize(name, KeyCase(case) if case is not None else None) == expected


class TestKeyFormatter:
    @pytest.fixture
    def target_class(self):
        from ..naming import KeyFormatter

        return KeyFormatter

    def test_deep(self, target_class):
        target = target_class("camelCase")
        assert target(
            {
                "first_name": "a",
                "home_address": {"zip_code": "1", "line_list": ["x_y", {"some_key": 1}]},
            }
        ) == {
            "firstName": "a",
            "homeAddress": {"zipCode": "1", "lineList": ["x_y", {"someKey": 1}]},
        }

    def test_scalars(self, target_class):
        target = target_class()
        assert target("first_name") == "first_name"
        assert target(["a_b", 1]) == ["a_b", 1]
        assert target(None) is None

    def test_callable(self, target_class):
        target = target_class(lambda name: name.upper())
        assert target.key("name") == "NAME"
        assert target({"a": {"b": 1}}) == {"A": {"B": 1}}

    def test_enum(self, target_class):
        from ..naming import KeyCase

        assert target_class(KeyCase.SNAKE).key("firstName") == "first_name"

    def test_invalid(self, target_class):
        with pytest.raises(InvalidConfigurationError) as e:
            target_class("SHOUTING_CASE")
        assert '"SHOUTING_CASE"' in str(e.value)
        assert '"camelCase"' in str(e.value)

        with pytest.raises(InvalidConfigurationError):
            target_class(42)


class TestTypeResolver:
    @pytest.fixture
    def target_class(self):
        from ..naming import TypeResolver

        return TypeResolver

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("user", "users"),
            ("users", "users"),
            ("address", "addresses"),
            ("country", "countries"),
            ("person", "people"),
        ],
    )
    def test_pluralize(self, target_class, name, expected):
        assert target_class()(name) == expected

    def test_no_pluralize(self, target_class):
        assert target_class(pluralize_type=False)("address") == "address"

    def test_hook(self, target_class):
        calls = []

        def type_for_attribute(name, record):
            calls.append((name, record))
            return record.get("kind")

        target = target_class(type_for_attribute)
        assert target("pets", {"kind": "dogs"}) == "dogs"
        # falls back when the hook has no opinion
        assert target("pet", {}) == "pets"
        assert target("pet") == "pets"
        assert calls == [("pets", {"kind": "dogs"}), ("pet", {}), ("pet", {})]
