"""CSV export of decoded message groups.

Each message group becomes one CSV file. The header row is taken from the
field names of the group's first message.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Union

from ..exceptions import ExportError
from ..models.records import DecodedMessage

logger = logging.getLogger(__name__)


def export_csv(path: Union[str, Path], messages: Sequence[DecodedMessage]) -> int:
    """Write one message group to a CSV file.

    Args:
        path: Destination file
        messages: Messages of a single group

    Returns:
        Number of data rows written (0 for an empty group, which writes no file)

    Raises:
        ExportError: If the file cannot be written
    """
    if not messages:
        return 0

    path = Path(path)
    try:
        with path.open("w", newline="", encoding="utf-8") as handle:
            writer = csv.writer(handle)
            writer.writerow(messages[0].field_names())
            for message in messages:
                writer.writerow(message.values())
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e

    logger.debug("Wrote %d rows to %s", len(messages), path)
    return len(messages)


def export_groups(
    directory: Union[str, Path], groups: Mapping[str, Sequence[DecodedMessage]]
) -> dict[str, Path]:
    """Write every non-empty group to ``<directory>/<name>.csv``.

    Creates the directory if needed.

    Returns:
        Mapping of group name to the file written

    Raises:
        ExportError: If the directory or a file cannot be written
    """
    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExportError(f"Cannot create output directory {directory}: {e}") from e

    written: dict[str, Path] = {}
    for name, messages in groups.items():
        path = directory / f"{name}.csv"
        if export_csv(path, messages):
            written[name] = path
    return written


def write_warnings_log(path: Union[str, Path], warnings: Iterable[str]) -> None:
    """Write one warning per line.

    Raises:
        ExportError: If the file cannot be written
    """
    path = Path(path)
    try:
        with path.open("w", encoding="utf-8") as handle:
            for line in warnings:
                handle.write(f"{line}\n")
    except OSError as e:
        raise ExportError(f"Cannot write {path}: {e}") from e
