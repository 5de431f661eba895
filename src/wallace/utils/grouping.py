"""Grouping of decoded messages by message name."""

from __future__ import annotations

from collections.abc import Iterable

from ..models.records import DecodedMessage


def group_by_name(messages: Iterable[DecodedMessage]) -> dict[str, list[DecodedMessage]]:
    """Bucket messages by their message name.

    Groups appear in the order their first message was seen, and messages keep
    their stream order within a group.

    Example:
        >>> groups = group_by_name(result.messages)
        >>> list(groups)
        ['HELLO', 'GPS']
    """
    groups: dict[str, list[DecodedMessage]] = {}
    for message in messages:
        groups.setdefault(message.name, []).append(message)
    return groups
