"""Unit tests for type-code resolution."""

from __future__ import annotations

import pytest

from wallace.codec import FieldKind, resolve_type_code, type_width


class TestNumericCodes:
    """Test single-letter numeric codes."""

    @pytest.mark.parametrize(
        "code,kind,width",
        [
            ("Q", FieldKind.UINT, 8),
            ("q", FieldKind.INT, 8),
            ("I", FieldKind.UINT, 4),
            ("i", FieldKind.INT, 4),
            ("H", FieldKind.UINT, 2),
            ("h", FieldKind.INT, 2),
            ("B", FieldKind.UINT, 1),
            ("b", FieldKind.INT, 1),
            ("f", FieldKind.FLOAT, 4),
            ("d", FieldKind.FLOAT, 8),
        ],
    )
    def test_numeric(self, code: str, kind: FieldKind, width: int) -> None:
        """Test each numeric code resolves to its kind and width."""
        rule = resolve_type_code(code)

        assert rule is not None
        assert rule.kind is kind
        assert rule.width == width
        assert rule.struct_format is not None
        assert rule.struct_format.startswith("<")

    def test_case_sensitive(self) -> None:
        """Test that upper and lower case differ in signedness."""
        assert resolve_type_code("H").kind is FieldKind.UINT
        assert resolve_type_code("h").kind is FieldKind.INT
        assert resolve_type_code("F") is None
        assert resolve_type_code("D") is None


class TestParametricCodes:
    """Test text and byte-block codes."""

    def test_repeated_c_is_text(self) -> None:
        """Test N repeated 'c' is text of width N."""
        for n in (1, 4, 16):
            rule = resolve_type_code("c" * n)
            assert rule.kind is FieldKind.TEXT
            assert rule.width == n

    def test_explicit_length_text(self) -> None:
        """Test '<N>s' is text of width N."""
        assert resolve_type_code("10s").kind is FieldKind.TEXT
        assert resolve_type_code("10s").width == 10
        assert resolve_type_code("0s").width == 0
        assert resolve_type_code("128s").width == 128

    def test_repeated_b_is_byte_block(self) -> None:
        """Test repeated 'B' or 'b' (more than one) is a raw byte block."""
        assert resolve_type_code("BBBB").kind is FieldKind.BYTES
        assert resolve_type_code("BBBB").width == 4
        assert resolve_type_code("bbb").kind is FieldKind.BYTES
        assert resolve_type_code("bbb").width == 3

    def test_single_b_is_integer(self) -> None:
        """Test single 'B' stays an 8-bit integer, not a byte block."""
        assert resolve_type_code("B").kind is FieldKind.UINT


class TestUnresolvable:
    """Test codes outside the grammar."""

    @pytest.mark.parametrize(
        "code", ["", "x", "s", "Bb", "cs", "ccB", "-1s", "1.5s", "HH", "QQ", "s10", " H"]
    )
    def test_unresolvable(self, code: str) -> None:
        """Test codes outside the grammar resolve to None."""
        assert resolve_type_code(code) is None
        assert type_width(code) is None

    def test_non_ascii_digits_rejected(self) -> None:
        """Test explicit lengths only accept ASCII digits."""
        assert resolve_type_code("٣s") is None


class TestResolutionIsPure:
    """Test resolution is deterministic."""

    def test_same_input_same_output(self) -> None:
        """Test identical codes give equal rules."""
        assert resolve_type_code("16s") == resolve_type_code("16s")
        assert resolve_type_code("BBBB") == resolve_type_code("BBBB")

    def test_type_width(self) -> None:
        """Test the width shortcut."""
        assert type_width("Q") == 8
        assert type_width("cccc") == 4
        assert type_width("12s") == 12
