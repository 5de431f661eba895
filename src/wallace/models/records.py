"""Decoded message records."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodedMessage:
    """One successfully framed and decoded message.

    Attributes:
        log_type: Message type ID from the wire
        name: Message name from the registry
        fields: Ordered (field name, rendered value) pairs; skip-only fields are absent
    """

    log_type: int
    name: str
    fields: tuple[tuple[str, str], ...]

    def field_names(self) -> list[str]:
        return [name for name, _ in self.fields]

    def values(self) -> list[str]:
        return [value for _, value in self.fields]

    def as_dict(self) -> dict[str, str]:
        return dict(self.fields)
