"""Typed field codec for wallace.

This module provides type-code resolution, payload decoding with structured
diagnostics, and the matching payload encoder.
"""

from __future__ import annotations

from .diagnostics import Diagnostic, DiagnosticKind
from .encoder import encode_fields
from .fields import FieldDecodeResult, decode_fields, render_value
from .types import FieldKind, TypeRule, resolve_type_code, type_width

__all__ = [
    "decode_fields",
    "encode_fields",
    "render_value",
    "FieldDecodeResult",
    "Diagnostic",
    "DiagnosticKind",
    "FieldKind",
    "TypeRule",
    "resolve_type_code",
    "type_width",
]
