"""Structured decoding diagnostics.

Diagnostics describe non-fatal anomalies found while decoding. They carry the
facts of the anomaly (field, type code, sizes) so callers and tests can inspect
them, and render to a human-readable line for the warnings log.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Optional


class DiagnosticKind(enum.Enum):
    """Kinds of non-fatal decoding anomalies."""

    SKIP_UNRESOLVABLE = "skip_unresolvable"
    SKIP_OVERRUN = "skip_overrun"
    UNRESOLVABLE_TYPE = "unresolvable_type"
    FIELD_OVERRUN = "field_overrun"
    TRAILING_BYTES = "trailing_bytes"
    UNKNOWN_MESSAGE_TYPE = "unknown_message_type"


@dataclass(frozen=True)
class Diagnostic:
    """A single decoding anomaly.

    Attributes:
        kind: What went wrong
        field_name: Offending field, if the anomaly concerns one field
        type_code: Type code of the offending field
        expected: Bytes the field (or schema) needed; payload length for TRAILING_BYTES
        actual: Bytes available; bytes consumed for TRAILING_BYTES
        log_type: Message type ID, attached by the framer
        message_name: Resolved message name, attached by the framer
    """

    kind: DiagnosticKind
    field_name: Optional[str] = None
    type_code: Optional[str] = None
    expected: Optional[int] = None
    actual: Optional[int] = None
    log_type: Optional[int] = None
    message_name: Optional[str] = None

    def with_message(self, log_type: int, message_name: str) -> Diagnostic:
        """Return a copy carrying the message context."""
        return replace(self, log_type=log_type, message_name=message_name)

    @property
    def remaining(self) -> Optional[int]:
        """Unconsumed byte count for TRAILING_BYTES."""
        if self.kind is not DiagnosticKind.TRAILING_BYTES:
            return None
        if self.expected is None or self.actual is None:
            return None
        return self.expected - self.actual

    def describe(self) -> str:
        """Render the anomaly without message context."""
        kind = self.kind
        field = f"'{self.field_name}' ({self.type_code})"

        if kind is DiagnosticKind.SKIP_UNRESOLVABLE:
            return (
                f"Cannot determine size for skippable field '{self.field_name}' "
                f"with unknown type '{self.type_code}'."
            )
        if kind is DiagnosticKind.SKIP_OVERRUN:
            return (
                f"Attempted to skip field {field} of size {self.expected}, but only "
                f"{self.actual} bytes remain. Skipping remaining {self.actual} bytes."
            )
        if kind is DiagnosticKind.UNRESOLVABLE_TYPE:
            return (
                f"Cannot determine size for field '{self.field_name}' with unknown type "
                f"'{self.type_code}'. Stopping parse for this message."
            )
        if kind is DiagnosticKind.FIELD_OVERRUN:
            return (
                f"Attempted to read field {field} of size {self.expected}, but it exceeds "
                f"payload length {self.actual}. Stopping parse for this message."
            )
        if kind is DiagnosticKind.TRAILING_BYTES:
            return (
                f"Payload not fully consumed. Expected length {self.expected}, "
                f"read {self.actual}. Remaining {self.remaining} bytes."
            )
        return f"Unknown message type ID {self.log_type}; message dropped."

    def __str__(self) -> str:
        text = self.describe()
        if self.kind is DiagnosticKind.UNKNOWN_MESSAGE_TYPE or self.log_type is None:
            return text
        return f"log_type {self.log_type} ({self.message_name}): {text}"
