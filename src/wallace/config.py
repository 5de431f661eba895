"""Run configuration for the log decoder.

This module provides the configuration dataclass consumed by the message framer.
The defaults reproduce the historical behavior of the decoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

UnknownTypePolicy = Literal["drop", "warn"]

UNKNOWN_TYPE_POLICIES: tuple[str, ...] = ("drop", "warn")

# Payload lengths are carried in an unsigned 16-bit field
MAX_WIRE_PAYLOAD_LENGTH = 0xFFFF


@dataclass
class DecoderConfig:
    """Configuration for a decode run.

    Attributes:
        unknown_types: What to do with a message whose type ID is not in the registry.
            - "drop": omit it silently (default)
            - "warn": omit it and record an UNKNOWN_MESSAGE_TYPE diagnostic

        max_payload_length: Upper bound on a declared payload length (default None,
            no bound beyond the 16-bit wire limit). A larger declared length aborts
            the run with StreamError. Recommended when decoding untrusted input.

        best_effort_skip: Keep decoding a message after a skip-only field whose type
            code cannot be resolved, without moving the cursor (default False).
            Individual messages can opt in through ``MessageDef.best_effort``.

    Examples:
        ```python
        from wallace import DecoderConfig, extract_messages

        config = DecoderConfig(unknown_types="warn", max_payload_length=4096)
        result = extract_messages(stream, registry, config=config)
        ```
    """

    unknown_types: UnknownTypePolicy = "drop"
    max_payload_length: int | None = None
    best_effort_skip: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.unknown_types not in UNKNOWN_TYPE_POLICIES:
            raise ValueError(
                f"unknown_types must be one of {', '.join(UNKNOWN_TYPE_POLICIES)}, "
                f"got {self.unknown_types!r}"
            )

        if self.max_payload_length is not None and not (
            0 <= self.max_payload_length <= MAX_WIRE_PAYLOAD_LENGTH
        ):
            raise ValueError(
                f"max_payload_length must be 0-{MAX_WIRE_PAYLOAD_LENGTH}, "
                f"got {self.max_payload_length}"
            )
