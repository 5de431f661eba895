"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from typing import Any

import pytest

from wallace import FieldDef, MessageRegistry

REGISTRY_DATA: dict[str, Any] = {
    "1": {"name": "HELLO", "fields": [{"name": "A", "type": "H"}, {"name": "B", "type": "B"}]},
    "5": {
        "name": "GPS",
        "fields": [
            {"name": "TIME_US", "type": "Q"},
            {"name": "LAT", "type": "i"},
            {"name": "LNG", "type": "i"},
            {"name": "PADDING", "type": "BB"},
            {"name": "ALT", "type": "f"},
        ],
    },
    "9": {
        "name": "FILE",
        "fields": [{"name": "SIZE", "type": "H"}, {"name": "FILE_CONTENTS", "type": "c"}],
    },
}


def make_fields(*pairs: tuple[str, str]) -> list[FieldDef]:
    """Build an ordered schema from (name, type code) pairs."""
    return [FieldDef(name=name, type=code) for name, code in pairs]


@pytest.fixture
def registry_data() -> dict[str, Any]:
    """Raw registry mapping as found in a messages.json file."""
    return REGISTRY_DATA


@pytest.fixture
def registry() -> MessageRegistry:
    """Validated sample registry."""
    return MessageRegistry.from_mapping(REGISTRY_DATA)


@pytest.fixture
def hello_payload() -> bytes:
    """HELLO payload decoding to A=42, B=5."""
    return b"\x2a\x00\x05"
