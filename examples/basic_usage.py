#!/usr/bin/env python3
"""Basic usage example for wallace.

This example demonstrates:
1. Loading a message registry
2. Writing a small log with the encoding helpers
3. Decoding it back into records and diagnostics
4. Exporting one CSV per message type
"""

from __future__ import annotations

import io
import tempfile
from pathlib import Path

from wallace import (
    build_log,
    encode_fields,
    export_groups,
    extract_messages,
    group_by_name,
    load_registry,
)

REGISTRY_PATH = Path(__file__).with_name("messages.json")


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("wallace Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Loading the message registry...")
    registry = load_registry(REGISTRY_PATH)
    for type_id, definition in registry.items():
        width = definition.fixed_width()
        size = f"{width} bytes" if width is not None else "variable"
        print(f"   {type_id}: {definition.name} ({size})")
    print()

    print("2. Writing a log...")
    att = registry.get(2).fields
    records = [
        (1, b"\x2a\x00\x05"),
        (2, encode_fields(att, {"TIME_US": 1000, "ROLL": 0.5, "PITCH": -1.25, "YAW": 270})),
        (2, encode_fields(att, {"TIME_US": 2000, "ROLL": 0.75, "PITCH": -1.0, "YAW": 271})),
        (3, encode_fields(registry.get(3).fields, {"NAME": "notes.txt", "FILE_CONTENTS": "hi"})),
        (1, b"\x2a\x00\x05\x00"),
    ]
    log = build_log(records)
    print(f"   {len(records)} messages, {len(log)} bytes")
    print()

    print("3. Decoding...")
    result = extract_messages(io.BytesIO(log), registry)
    for message in result.messages:
        print(f"   {message.name}: {message.as_dict()}")
    for warning in result.warnings:
        print(f"   warning: {warning}")
    print(f"   skipped fields: {result.skip_count}")
    print()

    print("4. Exporting CSV files...")
    with tempfile.TemporaryDirectory() as directory:
        written = export_groups(directory, group_by_name(result.messages))
        for name, path in written.items():
            print(f"   {name} -> {path.name}")


if __name__ == "__main__":
    main()
