"""Log file opening with transparent decompression."""

from __future__ import annotations

import bz2
import gzip
from pathlib import Path
from typing import BinaryIO, Union


def open_log(path: Union[str, Path]) -> BinaryIO:
    """Open a log file for binary reading.

    Files ending in ``.bz2`` or ``.gz`` are decompressed on the fly; anything
    else is read as-is. The caller owns the returned stream.

    Args:
        path: Path to the log file

    Returns:
        Readable binary stream over the decompressed log

    Raises:
        FileNotFoundError: If the file does not exist

    Example:
        >>> with open_log("flight.dat.bz2") as stream:
        ...     result = extract_messages(stream, registry)
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix == ".bz2":
        return bz2.open(path, "rb")
    if suffix == ".gz":
        return gzip.open(path, "rb")
    return open(path, "rb")
