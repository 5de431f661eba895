"""wallace: Binary Log Decoder

A Python library for decoding streams of length-prefixed, schema-typed binary
records ("log messages") into tabular rows. A JSON registry maps numeric
message-type IDs to ordered field layouts written as compact type codes.

Key Features:
- Pydantic-validated message registry
- Little-endian integers, floats, fixed text and raw byte blocks
- Skip-only padding fields and a read-to-end tail field
- Structured, non-fatal diagnostics; strict stream framing
- CSV export per message type

Quick Start:
    >>> from wallace import MessageRegistry, extract_messages, build_log
    >>> import io
    >>>
    >>> registry = MessageRegistry.from_mapping(
    ...     {"1": {"name": "HELLO", "fields": [{"name": "A", "type": "H"},
    ...                                        {"name": "B", "type": "B"}]}}
    ... )
    >>> log = build_log([(1, b"\\x2a\\x00\\x05")])
    >>> result = extract_messages(io.BytesIO(log), registry)
    >>> result.messages[0].fields
    (('A', '42'), ('B', '5'))
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import (
    Diagnostic,
    DiagnosticKind,
    FieldDecodeResult,
    FieldKind,
    TypeRule,
    decode_fields,
    encode_fields,
    resolve_type_code,
)
from .config import DecoderConfig
from .exceptions import (
    EncodeError,
    ExportError,
    RegistryError,
    StreamError,
    WallaceError,
)
from .framing import ExtractionResult, build_log, extract_messages, frame_record, iter_frames
from .io import open_log
from .models import DecodedMessage, FieldDef, MessageDef, MessageRegistry, load_registry
from .utils import export_csv, export_groups, group_by_name, write_warnings_log

__all__ = [
    # Core API
    "extract_messages",
    "decode_fields",
    "resolve_type_code",
    "ExtractionResult",
    "FieldDecodeResult",
    "DecodedMessage",
    # Registry
    "MessageRegistry",
    "MessageDef",
    "FieldDef",
    "load_registry",
    # Types and diagnostics
    "FieldKind",
    "TypeRule",
    "Diagnostic",
    "DiagnosticKind",
    # Configuration
    "DecoderConfig",
    # Exceptions
    "WallaceError",
    "RegistryError",
    "StreamError",
    "EncodeError",
    "ExportError",
    # Encoding
    "encode_fields",
    "frame_record",
    "build_log",
    "iter_frames",
    # I/O and export
    "open_log",
    "group_by_name",
    "export_csv",
    "export_groups",
    "write_warnings_log",
    # Version
    "__version__",
]
