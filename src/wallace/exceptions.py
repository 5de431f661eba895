"""Exception hierarchy for wallace.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from WallaceError for easy catching of any wallace-specific error.

Non-fatal decoding anomalies are not exceptions: they are reported as
:class:`wallace.codec.diagnostics.Diagnostic` values and the run continues.
"""

from __future__ import annotations


class WallaceError(Exception):
    """Base exception for all wallace errors."""

    pass


class RegistryError(WallaceError):
    """Raised when a message registry cannot be loaded or is invalid.

    Examples:
        - Registry file missing or unreadable
        - Malformed JSON
        - Message-type key that is not a decimal ID in 0-65535
        - Tail field (FILE_CONTENTS) that is not the last field of its message
    """

    pass


class StreamError(WallaceError):
    """Raised when the log stream cannot be framed. Aborts the whole run.

    Examples:
        - Stream ends inside the header, a type ID, a length, or a payload
        - Declared payload length above the configured maximum
        - The underlying byte source raises an I/O error

    Attributes:
        offset: Byte offset in the stream where the failing read started, if known
    """

    def __init__(self, message: str, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class ExportError(WallaceError):
    """Raised when decoded records or the warnings log cannot be written."""

    pass


class EncodeError(WallaceError):
    """Raised when field values cannot be encoded into a payload or frame.

    Examples:
        - Value out of range for its integer type
        - Text longer than its fixed width
        - Missing value for a field
        - Type ID or payload length outside the 16-bit wire range
    """

    pass
