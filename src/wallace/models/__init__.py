"""Registry and record models for wallace.

This module provides the pydantic models describing message layouts and the
record type produced by decoding.
"""

from __future__ import annotations

from .records import DecodedMessage
from .registry import (
    SKIP_FIELD_NAMES,
    TAIL_FIELD_NAME,
    FieldDef,
    MessageDef,
    MessageRegistry,
    load_registry,
)

__all__ = [
    "DecodedMessage",
    "FieldDef",
    "MessageDef",
    "MessageRegistry",
    "load_registry",
    "SKIP_FIELD_NAMES",
    "TAIL_FIELD_NAME",
]
