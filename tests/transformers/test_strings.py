"""Tests for the built-in string transformers."""

from __future__ import annotations

from typing import Any

import pytest

from sanitize.domain.fields import ElementHandle
from sanitize.transformers.strings import (
    BUILTIN_TRANSFORMERS,
    capitalize,
    lower,
    strip_space,
    trim_space,
    upper,
)


def _run(transformer: Any, value: Any) -> Any:
    items = [value]
    transformer(ElementHandle(items, 0, "field"), "rule", "")
    return items[0]


class TestBuiltins:
    def test_trim_space(self) -> None:
        assert _run(trim_space, "  john \t\n") == "john"

    def test_lower(self) -> None:
        assert _run(lower, "Codex.Monastery@Email.com") == "codex.monastery@email.com"

    def test_upper(self) -> None:
        assert _run(upper, "sw1a 1aa") == "SW1A 1AA"

    def test_capitalize(self) -> None:
        assert _run(capitalize, "mONASTERY") == "Monastery"

    def test_capitalize_empty(self) -> None:
        assert _run(capitalize, "") == ""

    def test_capitalize_only_first_character(self) -> None:
        assert _run(capitalize, "tag 1") == "Tag 1"

    def test_strip_space_only_ascii_space(self) -> None:
        assert _run(strip_space, "+44 00000\t00000\n") == "+4400000\t00000\n"

    def test_registered_names(self) -> None:
        assert set(BUILTIN_TRANSFORMERS) == {
            "trim_space",
            "strip_space",
            "lower",
            "upper",
            "capitalize",
        }


class TestNonStringNoOp:
    @pytest.mark.parametrize("transformer", list(BUILTIN_TRANSFORMERS.values()))
    @pytest.mark.parametrize("value", [42, None, 1.5, ["a "], {"k": " v "}])
    def test_leaves_value_untouched(self, transformer: Any, value: Any) -> None:
        assert _run(transformer, value) == value


class TestIdempotence:
    @pytest.mark.parametrize("name", ["trim_space", "lower", "upper", "strip_space"])
    @pytest.mark.parametrize("value", ["  Mixed Case  ", "a b c", "", "\tTab\t"])
    def test_twice_equals_once(self, name: str, value: str) -> None:
        transformer = BUILTIN_TRANSFORMERS[name]
        once = _run(transformer, value)
        assert _run(transformer, once) == once

    @pytest.mark.parametrize("value", ["John", "Tag 1", "A", "London"])
    def test_capitalize_fixed_point(self, value: str) -> None:
        assert _run(capitalize, value) == value
