"""Unit tests for the message registry."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from wallace import FieldDef, MessageDef, MessageRegistry, RegistryError, load_registry
from wallace.codec import FieldKind


class TestFieldDef:
    """Test field definitions."""

    def test_rule_cached(self) -> None:
        """Test the type code is resolved on construction."""
        field = FieldDef(name="LAT", type="i")

        assert field.rule is not None
        assert field.rule.kind is FieldKind.INT
        assert field.rule.width == 4

    def test_unresolvable_rule_is_none(self) -> None:
        """Test unresolvable codes are accepted and left unresolved."""
        assert FieldDef(name="X", type="??").rule is None

    @pytest.mark.parametrize("name", ["TRASH", "PADDING", "RESERVED"])
    def test_skip_names(self, name: str) -> None:
        """Test the three skip-only names."""
        assert FieldDef(name=name, type="B").is_skip

    def test_skip_names_case_sensitive(self) -> None:
        """Test skip-only names must match exactly."""
        assert not FieldDef(name="padding", type="B").is_skip

    def test_tail(self) -> None:
        """Test the tail field is FILE_CONTENTS with code 'c'."""
        assert FieldDef(name="FILE_CONTENTS", type="c").is_tail
        assert not FieldDef(name="FILE_CONTENTS", type="cc").is_tail
        assert not FieldDef(name="CONTENTS", type="c").is_tail

    def test_frozen(self) -> None:
        """Test field definitions cannot be modified."""
        field = FieldDef(name="A", type="H")

        with pytest.raises(ValidationError):
            field.type = "I"  # type: ignore[misc]


class TestMessageDef:
    """Test message definitions."""

    def test_tail_must_be_last(self) -> None:
        """Test a non-terminal tail field is rejected."""
        with pytest.raises(ValidationError, match="must be the last field"):
            MessageDef(
                name="BAD",
                fields=[
                    FieldDef(name="FILE_CONTENTS", type="c"),
                    FieldDef(name="AFTER", type="B"),
                ],
            )

    def test_tail_last_accepted(self) -> None:
        """Test a terminal tail field is accepted."""
        definition = MessageDef(
            name="FILE",
            fields=[FieldDef(name="SIZE", type="H"), FieldDef(name="FILE_CONTENTS", type="c")],
        )

        assert definition.fields[-1].is_tail
        assert definition.fixed_width() is None

    def test_value_fields_and_width(self) -> None:
        """Test value field listing and fixed width."""
        definition = MessageDef(
            name="M",
            fields=[
                FieldDef(name="A", type="H"),
                FieldDef(name="PADDING", type="BBB"),
                FieldDef(name="B", type="8s"),
            ],
        )

        assert [f.name for f in definition.value_fields()] == ["A", "B"]
        assert definition.fixed_width() == 13

    def test_best_effort_default(self) -> None:
        """Test best-effort is off unless requested."""
        assert MessageDef(name="M", fields=[]).best_effort is False


class TestMessageRegistry:
    """Test registry construction and lookup."""

    def test_from_mapping(self, registry_data: dict[str, Any]) -> None:
        """Test lookup by numeric type ID."""
        registry = MessageRegistry.from_mapping(registry_data)

        assert len(registry) == 3
        assert registry.get(1).name == "HELLO"
        assert registry.get(5).name == "GPS"
        assert registry.get(2) is None
        assert 9 in registry
        assert list(registry) == [1, 5, 9]
        assert registry.names() == ["HELLO", "GPS", "FILE"]

    def test_field_order_preserved(self, registry: MessageRegistry) -> None:
        """Test field order matches the file."""
        names = [field.name for field in registry.get(5).fields]

        assert names == ["TIME_US", "LAT", "LNG", "PADDING", "ALT"]

    @pytest.mark.parametrize("key", ["abc", "-1", "01", "1.0", "65536", ""])
    def test_unmatchable_keys_ignored(self, key: str, caplog: pytest.LogCaptureFixture) -> None:
        """Test keys that are not canonical decimal IDs are skipped with a warning."""
        with caplog.at_level(logging.WARNING, logger="wallace.models.registry"):
            registry = MessageRegistry.from_mapping(
                {key: {"name": "X", "fields": []}, "1": {"name": "HELLO", "fields": []}}
            )

        assert registry.names() == ["HELLO"]
        assert f"key {key!r}" in caplog.text

    def test_max_key(self) -> None:
        """Test the largest 16-bit ID is accepted."""
        registry = MessageRegistry.from_mapping({"65535": {"name": "LAST", "fields": []}})

        assert registry.get(65535).name == "LAST"

    def test_missing_name(self) -> None:
        """Test definitions need a name."""
        with pytest.raises(RegistryError, match="Invalid message registry"):
            MessageRegistry.from_mapping({"1": {"fields": []}})

    def test_non_terminal_tail(self) -> None:
        """Test tail-field validation surfaces as RegistryError."""
        data = {
            "3": {
                "name": "BAD",
                "fields": [{"name": "FILE_CONTENTS", "type": "c"}, {"name": "X", "type": "B"}],
            }
        }

        with pytest.raises(RegistryError, match="must be the last field"):
            MessageRegistry.from_mapping(data)

    def test_from_json(self, registry_data: dict[str, Any]) -> None:
        """Test JSON text loading."""
        registry = MessageRegistry.from_json(json.dumps(registry_data))

        assert registry.get(1).fields[0].name == "A"

    def test_from_json_malformed(self) -> None:
        """Test malformed JSON is a RegistryError."""
        with pytest.raises(RegistryError):
            MessageRegistry.from_json("{not json")


class TestLoadRegistry:
    """Test loading registry files."""

    def test_load(self, tmp_path: Path, registry_data: dict[str, Any]) -> None:
        """Test loading from a file."""
        path = tmp_path / "messages.json"
        path.write_text(json.dumps(registry_data))

        registry = load_registry(path)

        assert registry.get(1).name == "HELLO"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file is a RegistryError."""
        with pytest.raises(RegistryError, match="Cannot read"):
            load_registry(tmp_path / "missing.json")

    def test_not_an_object(self, tmp_path: Path) -> None:
        """Test a JSON array is rejected."""
        path = tmp_path / "messages.json"
        path.write_text("[]")

        with pytest.raises(RegistryError):
            load_registry(path)
