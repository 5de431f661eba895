"""Message stream framing for wallace.

This module frames the length-prefixed log stream, dispatches each payload to
the field decoder, and writes streams in the same format.
"""

from __future__ import annotations

from .stream import (
    ExtractionResult,
    RawFrame,
    build_log,
    extract_messages,
    frame_record,
    iter_frames,
    read_header,
)

__all__ = [
    "extract_messages",
    "iter_frames",
    "read_header",
    "frame_record",
    "build_log",
    "ExtractionResult",
    "RawFrame",
]
