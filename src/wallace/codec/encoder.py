"""Payload encoder.

This module provides encode_fields(), the inverse of decode_fields() for
known-width field kinds. It is used to produce fixture logs and by tools that
synthesize records for a registry.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from ..exceptions import EncodeError
from .types import FieldKind, TypeRule

if TYPE_CHECKING:
    from ..models.registry import FieldDef


def encode_fields(fields: Sequence[FieldDef], values: Mapping[str, Any]) -> bytes:
    """Encode field values into a payload laid out per the schema.

    Skip-only fields are written as zero bytes. Text is UTF-8 encoded and
    NUL-padded to the field width. The tail field takes text of any length.

    Args:
        fields: Field definitions in on-wire order
        values: Values keyed by field name (skip-only fields need no entry)

    Returns:
        Encoded payload

    Raises:
        EncodeError: If a value is missing, does not fit its field, or a type
            code cannot be resolved

    Example:
        >>> from wallace.models import FieldDef
        >>> schema = [FieldDef(name="A", type="H"), FieldDef(name="B", type="B")]
        >>> encode_fields(schema, {"A": 42, "B": 5})
        b'*\\x00\\x05'
    """
    result = bytearray()

    for field in fields:
        rule = field.rule
        if rule is None and not field.is_tail:
            raise EncodeError(f"Field {field.name}: unresolvable type code {field.type!r}")

        if field.is_skip:
            result.extend(b"\x00" * rule.width)
            continue

        if field.name not in values:
            raise EncodeError(f"Field {field.name}: no value given")
        value = values[field.name]

        if field.is_tail:
            result.extend(_encode_text(field.name, value))
            continue

        result.extend(_encode_value(field.name, rule, value))

    return bytes(result)


def _encode_value(name: str, rule: TypeRule, value: Any) -> bytes:
    if rule.kind.is_numeric:
        if rule.kind is not FieldKind.FLOAT and (
            isinstance(value, bool) or not isinstance(value, int)
        ):
            raise EncodeError(f"Field {name}: expected int, got {type(value).__name__}")
        try:
            return rule.pack(value)
        except ValueError as e:
            raise EncodeError(f"Field {name}: {e}") from e

    if rule.kind is FieldKind.TEXT:
        raw = _encode_text(name, value)
    else:
        if not isinstance(value, (bytes, bytearray)):
            raise EncodeError(f"Field {name}: expected bytes, got {type(value).__name__}")
        raw = bytes(value)

    if len(raw) > rule.width:
        raise EncodeError(f"Field {name}: {len(raw)} bytes exceeds width {rule.width}")
    return raw.ljust(rule.width, b"\x00")


def _encode_text(name: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise EncodeError(f"Field {name}: expected str, got {type(value).__name__}")
