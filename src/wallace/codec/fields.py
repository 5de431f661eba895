"""Field decoding for a single message payload.

This module walks a payload in schema order and renders every value field as
text. Anomalies never raise: they are returned as diagnostics, and decoding of
the message stops at the first field whose boundaries cannot be trusted.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, NamedTuple

from .diagnostics import Diagnostic, DiagnosticKind
from .types import FieldKind, TypeRule

if TYPE_CHECKING:
    from ..models.registry import FieldDef


class FieldDecodeResult(NamedTuple):
    """Outcome of decoding one payload.

    Attributes:
        fields: Ordered (field name, rendered value) pairs
        diagnostics: Anomalies found, in the order encountered
        skip_count: Number of skip-only fields whose bytes were consumed
    """

    fields: list[tuple[str, str]]
    diagnostics: list[Diagnostic]
    skip_count: int

    @property
    def warnings(self) -> list[str]:
        return [str(diagnostic) for diagnostic in self.diagnostics]


def decode_fields(
    payload: bytes,
    fields: Sequence[FieldDef],
    *,
    best_effort: bool = False,
) -> FieldDecodeResult:
    """Decode a payload according to an ordered field schema.

    Args:
        payload: Message payload, exactly as framed
        fields: Field definitions in on-wire order
        best_effort: If True, a skip-only field whose type code cannot be resolved
            is reported and ignored without moving the cursor; otherwise it ends
            decoding of this payload

    Returns:
        FieldDecodeResult with decoded pairs, diagnostics and skip count

    Example:
        >>> from wallace.models import FieldDef
        >>> schema = [FieldDef(name="A", type="H"), FieldDef(name="B", type="B")]
        >>> decode_fields(b"\\x2a\\x00\\x05", schema).fields
        [('A', '42'), ('B', '5')]
    """
    decoded: list[tuple[str, str]] = []
    diagnostics: list[Diagnostic] = []
    skip_count = 0
    length = len(payload)
    position = 0

    for field in fields:
        rule = field.rule
        remaining = length - position

        if field.is_skip:
            if rule is None:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.SKIP_UNRESOLVABLE,
                        field_name=field.name,
                        type_code=field.type,
                    )
                )
                if best_effort:
                    continue
                break

            if rule.width > remaining:
                diagnostics.append(
                    Diagnostic(
                        DiagnosticKind.SKIP_OVERRUN,
                        field_name=field.name,
                        type_code=field.type,
                        expected=rule.width,
                        actual=remaining,
                    )
                )
                position = length
            else:
                position += rule.width
            skip_count += 1
            continue

        if field.is_tail:
            decoded.append((field.name, _render_text(payload[position:])))
            position = length
            continue

        if rule is None:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.UNRESOLVABLE_TYPE,
                    field_name=field.name,
                    type_code=field.type,
                )
            )
            break

        if rule.width > remaining:
            diagnostics.append(
                Diagnostic(
                    DiagnosticKind.FIELD_OVERRUN,
                    field_name=field.name,
                    type_code=field.type,
                    expected=rule.width,
                    actual=length,
                )
            )
            break

        raw = payload[position : position + rule.width]
        decoded.append((field.name, render_value(rule, raw)))
        position += rule.width

    if position < length:
        diagnostics.append(
            Diagnostic(DiagnosticKind.TRAILING_BYTES, expected=length, actual=position)
        )

    return FieldDecodeResult(decoded, diagnostics, skip_count)


def render_value(rule: TypeRule, raw: bytes) -> str:
    """Render exactly ``rule.width`` bytes as text.

    Integers render in base 10, floats as the shortest decimal that reads back
    to the same value in positional notation (``1``, ``0.00001``, ``NaN``),
    text with trailing NULs trimmed, and byte blocks as space-separated
    uppercase hex pairs.
    """
    if rule.kind is FieldKind.FLOAT:
        return _render_float(rule.unpack(raw), rule.width)
    if rule.kind.is_numeric:
        return str(rule.unpack(raw))
    if rule.kind is FieldKind.TEXT:
        return _render_text(raw)
    return raw.hex(" ").upper()


def _render_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace").rstrip("\x00")


def _render_float(value: float, width: int) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    text = repr(value)
    if width == 4:
        # Shortest decimal that survives a round trip through single precision
        packed = struct.pack("<f", value)
        for digits in range(1, 10):
            candidate = f"{value:.{digits}g}"
            if struct.pack("<f", float(candidate)) == packed:
                text = candidate
                break

    # Positional notation, no exponent and no trailing ".0"
    return format(Decimal(text).normalize(), "f")
