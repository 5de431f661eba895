"""Length-prefixed message stream framing.

The stream structure is:
- [Header (4 bytes)] followed by zero or more messages
- Message: [Type ID (2 bytes LE)] [Payload length (2 bytes LE)] [Payload]

End of stream is only valid immediately before a type ID. Any other short
read means the log is truncated or corrupt and aborts the run.
"""

from __future__ import annotations

import logging
import struct
import zlib
from collections.abc import Iterable, Iterator
from typing import BinaryIO, NamedTuple, Optional

from ..codec.diagnostics import Diagnostic, DiagnosticKind
from ..codec.fields import decode_fields
from ..config import MAX_WIRE_PAYLOAD_LENGTH, DecoderConfig
from ..exceptions import EncodeError, StreamError
from ..models.records import DecodedMessage
from ..models.registry import MAX_TYPE_ID, MessageRegistry

logger = logging.getLogger(__name__)

HEADER_SIZE = 4
TYPE_ID_SIZE = 2
LENGTH_SIZE = 2


class RawFrame(NamedTuple):
    """One framed message before field decoding.

    Attributes:
        log_type: Message type ID
        payload: Exactly the declared number of payload bytes
        offset: Stream offset of the type ID
    """

    log_type: int
    payload: bytes
    offset: int


class ExtractionResult(NamedTuple):
    """Outcome of decoding a whole stream.

    Attributes:
        messages: Decoded messages in stream order
        diagnostics: Diagnostics in stream order, each carrying its message context
        skip_count: Total skip-only fields consumed across the run
        header: The leading header value (signed 32-bit little-endian)
    """

    messages: list[DecodedMessage]
    diagnostics: list[Diagnostic]
    skip_count: int
    header: int

    @property
    def warnings(self) -> list[str]:
        return [str(diagnostic) for diagnostic in self.diagnostics]


class _Reader:
    """Offset-tracking exact reads over a binary stream.

    Failures of the byte source, including truncated or corrupt compressed
    input, surface as StreamError.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self.offset = 0

    def read(self, size: int, what: str, eof_ok: bool = False) -> Optional[bytes]:
        """Read exactly ``size`` bytes.

        Returns None if ``eof_ok`` and the stream was already exhausted.

        Raises:
            StreamError: On I/O failure or a short read
        """
        start = self.offset
        chunks = bytearray()
        while len(chunks) < size:
            try:
                chunk = self._stream.read(size - len(chunks))
            except (OSError, EOFError, zlib.error) as e:
                raise StreamError(f"I/O error reading {what} at offset {start}: {e}", start) from e
            if not chunk:
                break
            chunks.extend(chunk)

        self.offset += len(chunks)
        if not chunks and eof_ok:
            return None
        if len(chunks) < size:
            raise StreamError(
                f"Truncated stream: expected {size} bytes for {what} at offset {start}, "
                f"got {len(chunks)}",
                start,
            )
        return bytes(chunks)


def read_header(stream: BinaryIO) -> int:
    """Read the 4-byte stream header.

    Raises:
        StreamError: If the stream is shorter than the header
    """
    return _read_header(_Reader(stream))


def _read_header(reader: _Reader) -> int:
    raw = reader.read(HEADER_SIZE, "header")
    return struct.unpack("<i", raw)[0]


def iter_frames(
    stream: BinaryIO, max_payload_length: Optional[int] = None
) -> Iterator[RawFrame]:
    """Yield framed messages from a stream positioned after the header.

    Args:
        stream: Binary stream positioned at a message boundary
        max_payload_length: Reject declared payload lengths above this bound

    Raises:
        StreamError: On I/O failure, truncation, or an oversize declared length
    """
    yield from _iter_frames(_Reader(stream), max_payload_length)


def _iter_frames(reader: _Reader, max_payload_length: Optional[int]) -> Iterator[RawFrame]:
    while True:
        offset = reader.offset
        raw_type = reader.read(TYPE_ID_SIZE, "type ID", eof_ok=True)
        if raw_type is None:
            return

        log_type = struct.unpack("<H", raw_type)[0]
        length = struct.unpack("<H", reader.read(LENGTH_SIZE, "payload length"))[0]
        if max_payload_length is not None and length > max_payload_length:
            raise StreamError(
                f"Declared payload length {length} for log_type {log_type} at offset "
                f"{offset} exceeds maximum {max_payload_length}",
                offset,
            )

        payload = reader.read(length, f"log_type {log_type} payload")
        logger.debug("Framed log_type %d (%d bytes) at offset %d", log_type, length, offset)
        yield RawFrame(log_type, payload, offset)


def extract_messages(
    stream: BinaryIO,
    registry: MessageRegistry,
    config: Optional[DecoderConfig] = None,
) -> ExtractionResult:
    """Frame and decode every message in a log stream.

    Messages whose type ID is not in the registry are dropped; with
    ``config.unknown_types == "warn"`` each one also leaves a diagnostic.

    Args:
        stream: Binary stream positioned at the start of the log
        registry: Message definitions keyed by type ID
        config: Run configuration (defaults to DecoderConfig())

    Returns:
        ExtractionResult with messages, diagnostics, skip count and header

    Raises:
        StreamError: If the stream is truncated or the byte source fails

    Example:
        >>> import io
        >>> registry = MessageRegistry.from_mapping(
        ...     {"1": {"name": "HELLO", "fields": [{"name": "A", "type": "H"}]}}
        ... )
        >>> log = build_log([(1, b"\\x2a\\x00")])
        >>> extract_messages(io.BytesIO(log), registry).messages[0].fields
        (('A', '42'),)
    """
    config = config or DecoderConfig()
    reader = _Reader(stream)
    header = _read_header(reader)

    messages: list[DecodedMessage] = []
    diagnostics: list[Diagnostic] = []
    skip_count = 0

    for frame in _iter_frames(reader, config.max_payload_length):
        definition = registry.get(frame.log_type)
        if definition is None:
            logger.debug("Dropping unknown log_type %d at offset %d", frame.log_type, frame.offset)
            if config.unknown_types == "warn":
                diagnostics.append(
                    Diagnostic(DiagnosticKind.UNKNOWN_MESSAGE_TYPE, log_type=frame.log_type)
                )
            continue

        result = decode_fields(
            frame.payload,
            definition.fields,
            best_effort=definition.best_effort or config.best_effort_skip,
        )
        messages.append(DecodedMessage(frame.log_type, definition.name, tuple(result.fields)))
        diagnostics.extend(
            diagnostic.with_message(frame.log_type, definition.name)
            for diagnostic in result.diagnostics
        )
        skip_count += result.skip_count

    logger.info(
        "Decoded %d messages with %d warnings and %d skipped fields",
        len(messages),
        len(diagnostics),
        skip_count,
    )
    return ExtractionResult(messages, diagnostics, skip_count, header)


def frame_record(log_type: int, payload: bytes) -> bytes:
    """Frame one message as [type ID][length][payload].

    Raises:
        EncodeError: If the type ID or payload length does not fit 16 bits

    Example:
        >>> frame_record(1, b"\\x2a\\x00\\x05")
        b'\\x01\\x00\\x03\\x00*\\x00\\x05'
    """
    if not 0 <= log_type <= MAX_TYPE_ID:
        raise EncodeError(f"Message type ID must be 0-{MAX_TYPE_ID}, got {log_type}")
    if len(payload) > MAX_WIRE_PAYLOAD_LENGTH:
        raise EncodeError(
            f"Payload of {len(payload)} bytes exceeds maximum {MAX_WIRE_PAYLOAD_LENGTH}"
        )
    return struct.pack("<HH", log_type, len(payload)) + payload


def build_log(records: Iterable[tuple[int, bytes]], header: int = 0) -> bytes:
    """Build a complete log stream from (type ID, payload) pairs.

    Raises:
        EncodeError: If the header or any record does not fit the wire format
    """
    try:
        result = bytearray(struct.pack("<i", header))
    except struct.error as e:
        raise EncodeError(f"Header {header} does not fit a signed 32-bit value") from e

    for log_type, payload in records:
        result.extend(frame_record(log_type, payload))
    return bytes(result)
