"""Message registry: the mapping from message-type IDs to field layouts.

The registry is loaded from a JSON object keyed by decimal type ID:

    {
        "1": {"name": "HELLO", "fields": [{"name": "A", "type": "H"},
                                          {"name": "B", "type": "B"}]},
        "7": {"name": "FILE", "fields": [{"name": "SIZE", "type": "I"},
                                         {"name": "FILE_CONTENTS", "type": "c"}]}
    }

Keys that are not canonical decimal IDs in 0-65535 are logged and ignored.
Field order is the on-wire order. Type codes are resolved once when a
FieldDef is built and cached on it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    PrivateAttr,
    TypeAdapter,
    ValidationError,
    model_validator,
)

from ..codec.types import TypeRule, resolve_type_code
from ..exceptions import RegistryError

logger = logging.getLogger(__name__)

SKIP_FIELD_NAMES = frozenset({"TRASH", "PADDING", "RESERVED"})

TAIL_FIELD_NAME = "FILE_CONTENTS"
TAIL_FIELD_TYPE = "c"

MAX_TYPE_ID = 0xFFFF


class FieldDef(BaseModel):
    """One named, typed slot within a message.

    Attributes:
        name: Field name; TRASH, PADDING and RESERVED mark skip-only fields
        type: Type code string (see :mod:`wallace.codec.types`)
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str

    _rule: Optional[TypeRule] = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        self._rule = resolve_type_code(self.type)

    @property
    def rule(self) -> Optional[TypeRule]:
        """Resolved decoding rule, or None if the type code is unresolvable."""
        return self._rule

    @property
    def is_skip(self) -> bool:
        """Whether the field's bytes are consumed but never surfaced."""
        return self.name in SKIP_FIELD_NAMES

    @property
    def is_tail(self) -> bool:
        """Whether the field reads every remaining payload byte."""
        return self.name == TAIL_FIELD_NAME and self.type == TAIL_FIELD_TYPE


class MessageDef(BaseModel):
    """Layout of one message type.

    Attributes:
        name: Human-readable message name, also the output group name
        fields: Ordered field definitions
        best_effort: Keep decoding after a skip-only field with an
            unresolvable type code instead of stopping
    """

    model_config = ConfigDict(frozen=True)

    name: str
    fields: list[FieldDef]
    best_effort: bool = False

    @model_validator(mode="after")
    def _check_tail_field(self) -> MessageDef:
        for field in self.fields[:-1]:
            if field.is_tail:
                raise ValueError(
                    f"Message {self.name}: tail field {field.name} must be the last field"
                )
        return self

    def value_fields(self) -> list[FieldDef]:
        """Fields that produce values when decoded."""
        return [field for field in self.fields if not field.is_skip]

    def fixed_width(self) -> Optional[int]:
        """Total payload width, or None if any field is unresolvable or the tail field."""
        total = 0
        for field in self.fields:
            if field.is_tail or field.rule is None:
                return None
            total += field.rule.width
        return total


_RAW_REGISTRY = TypeAdapter(dict[str, MessageDef])


def _parse_type_id(key: str) -> Optional[int]:
    if not key.isascii() or not key.isdigit() or str(int(key)) != key:
        return None
    type_id = int(key)
    return type_id if type_id <= MAX_TYPE_ID else None


class MessageRegistry:
    """Read-only mapping from message-type ID to MessageDef.

    Example:
        >>> registry = MessageRegistry.from_mapping(
        ...     {"1": {"name": "HELLO", "fields": [{"name": "A", "type": "H"}]}}
        ... )
        >>> registry.get(1).name
        'HELLO'
        >>> registry.get(2) is None
        True
    """

    def __init__(self, definitions: Mapping[int, MessageDef]) -> None:
        self._definitions: dict[int, MessageDef] = dict(definitions)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> MessageRegistry:
        """Validate an in-memory registry object.

        Raises:
            RegistryError: If the object does not describe a valid registry
        """
        try:
            raw = _RAW_REGISTRY.validate_python(data)
        except ValidationError as e:
            raise RegistryError(f"Invalid message registry: {e}") from e
        return cls._from_raw(raw)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> MessageRegistry:
        """Validate a registry from JSON text.

        Raises:
            RegistryError: If the text is not valid JSON or not a valid registry
        """
        try:
            raw = _RAW_REGISTRY.validate_json(text)
        except ValidationError as e:
            raise RegistryError(f"Invalid message registry: {e}") from e
        return cls._from_raw(raw)

    @classmethod
    def _from_raw(cls, raw: dict[str, MessageDef]) -> MessageRegistry:
        definitions: dict[int, MessageDef] = {}
        for key, definition in raw.items():
            type_id = _parse_type_id(key)
            if type_id is None:
                # Unreachable from any framed type ID
                logger.warning(
                    "Ignoring message %s: key %r is not a decimal type ID in 0-%d",
                    definition.name,
                    key,
                    MAX_TYPE_ID,
                )
                continue
            definitions[type_id] = definition
        return cls(definitions)

    def get(self, type_id: int) -> Optional[MessageDef]:
        """Return the definition for a type ID, or None if unknown."""
        return self._definitions.get(type_id)

    def names(self) -> list[str]:
        """Message names in registry order."""
        return [definition.name for definition in self._definitions.values()]

    def items(self) -> Iterator[tuple[int, MessageDef]]:
        return iter(self._definitions.items())

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._definitions

    def __iter__(self) -> Iterator[int]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)


def load_registry(path: Union[str, Path]) -> MessageRegistry:
    """Load and validate a message registry file.

    Args:
        path: Path to the JSON registry

    Returns:
        Validated MessageRegistry

    Raises:
        RegistryError: If the file cannot be read or is not a valid registry
    """
    path = Path(path)
    try:
        text = path.read_bytes()
    except OSError as e:
        raise RegistryError(f"Cannot read message registry {path}: {e}") from e

    registry = MessageRegistry.from_json(text)
    logger.debug("Loaded %d message definitions from %s", len(registry), path)
    return registry
