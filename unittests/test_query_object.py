from dataclasses import dataclass

import pytest
from frozendict import frozendict

from pvschema import SchemaError
from pvschema.utils.query_object import (
    delete_field,
    expand_path,
    is_mutable,
    optional_field,
    required_field,
    set_field,
    split_path,
    to_wildcard_path,
)


@dataclass
class Address:
    street: str


class TestQueryFields:
    def test_mappings_lists_and_attributes(self):
        data = {"people": [{"address": Address(street="Main Street")}]}
        assert required_field(data, "people.0.address.street") == "Main Street"

    def test_missing_path_names_first_missing_part(self):
        with pytest.raises(AttributeError, match="a.b: Not found"):
            required_field({"a": {}}, "a.b.c")

    @pytest.mark.parametrize("path", ["a.b", "list.5", "list.x", "text.upper", "a.c.d"])
    def test_optional_field_returns_none(self, path):
        data = {"a": {"c": None}, "list": [1], "text": "abc"}
        assert optional_field(data, path) is None

    def test_invalid_path(self):
        with pytest.raises(SchemaError):
            split_path("a..b")


class TestExpandPath:
    def test_plain_path_yields_once(self):
        assert list(expand_path({"a": {"b": 1}}, "a.b")) == [("a.b", 1)]
        assert list(expand_path({}, "a.b")) == [("a.b", None)]

    def test_wildcards_are_expanded(self):
        data = {"rows": [{"cells": [1, 2]}, {"cells": [3]}, {}]}
        assert list(expand_path(data, "rows.$.cells.$")) == [
            ("rows.0.cells.0", 1),
            ("rows.0.cells.1", 2),
            ("rows.1.cells.0", 3),
        ]

    def test_wildcard_without_list_yields_nothing(self):
        assert not list(expand_path({"rows": "abc"}, "rows.$"))
        assert not list(expand_path({}, "rows.$.a"))


class TestModifyFields:
    def test_set_field(self):
        address = Address(street="x")
        data = {"a": [0, 1], "b": {"c": 1}, "address": address}
        set_field(data, "a.1", "one")
        set_field(data, "b.c", 2)
        set_field(data, "address.street", "y")
        assert data == {"a": [0, "one"], "b": {"c": 2}, "address": Address(street="y")}

    def test_set_field_without_parent(self):
        with pytest.raises(AttributeError):
            set_field({}, "a.b", 1)

    def test_delete_field(self):
        data = {"a": {"b": 1, "c": 2}}
        delete_field(data, "a.b")
        delete_field(data, "a.missing")
        assert data == {"a": {"c": 2}}


def test_to_wildcard_path():
    assert to_wildcard_path("tags.0.items.12.name") == "tags.$.items.$.name"


class TestImmutableContainers:
    def test_is_mutable(self):
        @dataclass(frozen=True)
        class Point:
            x: int

        assert is_mutable({}) and is_mutable([]) and is_mutable(Address(street="x"))
        assert not is_mutable(()) and not is_mutable(frozendict()) and not is_mutable(Point(x=1))

    def test_set_field_skips_immutable_parents(self):
        data = {"nums": ("1", "2"), "frozen": frozendict(a="1")}
        assert set_field(data, "nums.0", 1) is False
        assert set_field(data, "frozen.a", 1) is False
        assert set_field(data, "nums", [1, 2]) is True
        assert data == {"nums": [1, 2], "frozen": frozendict(a="1")}
