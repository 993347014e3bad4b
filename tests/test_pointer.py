"""Tests for specview.pointer."""

from __future__ import annotations

import pytest

from specview.pointer import compile_pointer, escape, join_pointer, parse_pointer, unescape


class TestEscape:
    def test_escapes_slash(self) -> None:
        assert escape("/pets/{id}") == "~1pets~1{id}"

    def test_escapes_tilde_before_slash(self) -> None:
        assert escape("a~/b") == "a~0~1b"

    def test_integer_segment(self) -> None:
        assert escape(3) == "3"

    def test_rejects_other_types(self) -> None:
        with pytest.raises(TypeError):
            escape(None)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            escape(True)  # type: ignore[arg-type]

    def test_unescape_reverses_escape(self) -> None:
        assert unescape(escape("~1/~0")) == "~1/~0"


class TestCompilePointer:
    def test_operation_pointer(self) -> None:
        assert compile_pointer(["paths", "/pets/{id}", "get"]) == "/paths/~1pets~1{id}/get"

    def test_empty(self) -> None:
        assert compile_pointer([]) == ""

    def test_deterministic(self) -> None:
        segments = ["paths", "/a/b", "post"]
        assert compile_pointer(segments) == compile_pointer(list(segments))

    def test_distinct_segments_do_not_collide(self) -> None:
        assert compile_pointer(["a/b"]) != compile_pointer(["a", "b"])

    def test_join(self) -> None:
        assert join_pointer("/paths/~1pets/get", ["parameters", "query", "limit"]) == (
            "/paths/~1pets/get/parameters/query/limit"
        )


class TestParsePointer:
    def test_round_trip(self) -> None:
        segments = ["paths", "/pets/{id}", "get"]
        assert parse_pointer(compile_pointer(segments)) == segments

    def test_accepts_hash_prefix(self) -> None:
        assert parse_pointer("#/components/schemas/Pet") == ["components", "schemas", "Pet"]

    def test_empty_pointer(self) -> None:
        assert parse_pointer("") == []
        assert parse_pointer("#") == []

    def test_rejects_missing_leading_slash(self) -> None:
        with pytest.raises(ValueError):
            parse_pointer("components/schemas")
