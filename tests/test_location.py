"""Tests for waymark.location — path parsing, formatting, and keys."""

import dataclasses

import pytest

from waymark.location import (
    Action,
    Location,
    PartialPath,
    Path,
    create_key,
    create_path,
    parse_path,
    to_partial_path,
)


class TestParsePath:
    def test_all_parts(self) -> None:
        assert parse_path("/users?page=2#top") == PartialPath("/users", "?page=2", "#top")

    def test_pathname_only(self) -> None:
        assert parse_path("/users") == PartialPath(pathname="/users")

    def test_search_only(self) -> None:
        assert parse_path("?q=1") == PartialPath(search="?q=1")

    def test_hash_only(self) -> None:
        assert parse_path("#top") == PartialPath(hash="#top")

    def test_question_mark_inside_hash(self) -> None:
        assert parse_path("/a#b?c") == PartialPath(pathname="/a", hash="#b?c")

    def test_empty(self) -> None:
        assert parse_path("") == PartialPath()


class TestCreatePath:
    def test_joins_parts(self) -> None:
        assert create_path(Path("/users", "?page=2", "#top")) == "/users?page=2#top"

    def test_missing_parts_default(self) -> None:
        assert create_path(PartialPath(search="?q=1")) == "/?q=1"

    def test_mapping(self) -> None:
        assert create_path({"pathname": "/a", "hash": "#x"}) == "/a#x"

    def test_inverse_of_parse(self) -> None:
        url = "/a/b?c=d#e"
        assert create_path(parse_path(url)) == url


class TestToPartialPath:
    def test_location(self) -> None:
        location = Location(pathname="/a", search="?b", state={"x": 1}, key="k")
        assert to_partial_path(location) == PartialPath("/a", "?b", "")

    def test_partial_path_passes_through(self) -> None:
        partial = PartialPath(pathname="/a")
        assert to_partial_path(partial) is partial

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="Cannot interpret"):
            to_partial_path(42)  # type: ignore[arg-type]


class TestLocation:
    def test_defaults(self) -> None:
        location = Location()
        assert location == Location(pathname="/", search="", hash="", state=None, key="default")

    def test_is_a_path(self) -> None:
        assert isinstance(Location(), Path)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            Location().pathname = "/x"  # type: ignore[misc]


class TestAction:
    def test_values(self) -> None:
        assert [a.value for a in Action] == ["POP", "PUSH", "REPLACE"]

    def test_string_comparison(self) -> None:
        assert Action.PUSH == "PUSH"


class TestCreateKey:
    def test_length(self) -> None:
        assert len(create_key()) == 8
        assert len(create_key(12)) == 12

    def test_base36(self) -> None:
        key = create_key(32)
        assert key.isalnum()
        assert key == key.lower()

    def test_distinct(self) -> None:
        assert len({create_key() for _ in range(50)}) > 1
