"""Type-code resolution.

A field's on-wire layout is described by a compact, case-sensitive type code:

    ======================  ===================================  =====
    Code                    Meaning                              Width
    ======================  ===================================  =====
    Q / q                   unsigned / signed 64-bit integer     8
    I / i                   unsigned / signed 32-bit integer     4
    H / h                   unsigned / signed 16-bit integer     2
    B / b                   unsigned / signed 8-bit integer      1
    f                       32-bit float                         4
    d                       64-bit float                         8
    c * N                   fixed-width text                     N
    B * N or b * N (N > 1)  fixed-width raw byte block           N
    <N>s                    fixed-width text, explicit length    N
    ======================  ===================================  =====

Multi-byte numbers are little-endian. Resolution is pure and cached.
"""

from __future__ import annotations

import enum
import re
import struct
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

_EXPLICIT_TEXT = re.compile(r"[0-9]+s")


class FieldKind(enum.Enum):
    """Decoding rule families."""

    UINT = "uint"
    INT = "int"
    FLOAT = "float"
    TEXT = "text"
    BYTES = "bytes"

    @property
    def is_numeric(self) -> bool:
        return self in (FieldKind.UINT, FieldKind.INT, FieldKind.FLOAT)


@dataclass(frozen=True)
class TypeRule:
    """Concrete decoding rule for a type code.

    Attributes:
        code: The type code this rule was resolved from
        kind: Decoding rule family
        width: Number of payload bytes the field occupies
        struct_format: Little-endian ``struct`` format for numeric kinds, else None
    """

    code: str
    kind: FieldKind
    width: int
    struct_format: Optional[str] = None

    def unpack(self, raw: bytes) -> int | float:
        """Unpack a numeric value from exactly ``width`` bytes."""
        if self.struct_format is None:
            raise TypeError(f"Type code {self.code!r} is not numeric")
        return struct.unpack(self.struct_format, raw)[0]

    def pack(self, value: int | float) -> bytes:
        """Pack a numeric value into ``width`` bytes.

        Raises:
            ValueError: If the value does not fit the type
        """
        if self.struct_format is None:
            raise TypeError(f"Type code {self.code!r} is not numeric")
        try:
            return struct.pack(self.struct_format, value)
        except struct.error as e:
            raise ValueError(f"Value {value!r} does not fit type {self.code!r}: {e}") from e


_NUMERIC_RULES: dict[str, TypeRule] = {
    "Q": TypeRule("Q", FieldKind.UINT, 8, "<Q"),
    "q": TypeRule("q", FieldKind.INT, 8, "<q"),
    "I": TypeRule("I", FieldKind.UINT, 4, "<I"),
    "i": TypeRule("i", FieldKind.INT, 4, "<i"),
    "H": TypeRule("H", FieldKind.UINT, 2, "<H"),
    "h": TypeRule("h", FieldKind.INT, 2, "<h"),
    "B": TypeRule("B", FieldKind.UINT, 1, "<B"),
    "b": TypeRule("b", FieldKind.INT, 1, "<b"),
    "f": TypeRule("f", FieldKind.FLOAT, 4, "<f"),
    "d": TypeRule("d", FieldKind.FLOAT, 8, "<d"),
}


@lru_cache(maxsize=None)
def resolve_type_code(code: str) -> Optional[TypeRule]:
    """Resolve a type code into a decoding rule.

    Args:
        code: Type code string, e.g. ``"H"``, ``"cccc"``, ``"16s"``, ``"BBBBBB"``

    Returns:
        The resolved TypeRule, or None if the code is unresolvable

    Example:
        >>> resolve_type_code("H").width
        2
        >>> resolve_type_code("cccc").kind
        <FieldKind.TEXT: 'text'>
        >>> resolve_type_code("x") is None
        True
    """
    if not code:
        return None

    rule = _NUMERIC_RULES.get(code)
    if rule is not None:
        return rule

    if code == "c" * len(code):
        return TypeRule(code, FieldKind.TEXT, len(code))

    if _EXPLICIT_TEXT.fullmatch(code):
        return TypeRule(code, FieldKind.TEXT, int(code[:-1]))

    if code == "B" * len(code) or code == "b" * len(code):
        return TypeRule(code, FieldKind.BYTES, len(code))

    return None


def type_width(code: str) -> Optional[int]:
    """Return the byte width of a type code, or None if unresolvable."""
    rule = resolve_type_code(code)
    return rule.width if rule is not None else None
