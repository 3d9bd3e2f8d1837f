"""
Read-only entity model handed to the generator.

The model is built once by the model loader (see `language.py`) and never
mutated afterwards: every class here is a frozen dataclass and collections are
tuples.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

NEUTRAL_TYPES = (
    "string",
    "byte",
    "short",
    "int",
    "long",
    "decimal",
    "float",
    "double",
    "boolean",
    "date",
    "time",
    "timestamp",
    "binary",
)


@dataclass(frozen=True)
class Attribute:
    name: str
    neutral_type: str
    key: bool = False
    not_null: bool = False
    database_not_null: bool = False
    auto_incremented: bool = False
    long_text: bool = False
    max_length: Optional[int] = None
    database_name: Optional[str] = None
    database_type: Optional[str] = None
    # "45" or "10.2" (precision.scale), kept as written in the model
    database_size: Optional[str] = None
    default_value: Optional[str] = None
    database_default_value: Optional[str] = None

    @property
    def binary(self) -> bool:
        return self.neutral_type == "binary"

    @property
    def is_string_type(self) -> bool:
        return self.neutral_type == "string"

    @property
    def nullable(self) -> bool:
        return not (self.not_null or self.database_not_null or self.key)


@dataclass(frozen=True)
class Entity:
    name: str
    attributes: tuple[Attribute, ...] = ()

    @property
    def key_attributes(self) -> tuple[Attribute, ...]:
        return tuple(a for a in self.attributes if a.key)

    @property
    def non_key_attributes(self) -> tuple[Attribute, ...]:
        return tuple(a for a in self.attributes if not a.key)

    def get_attribute(self, name: str) -> Optional[Attribute]:
        return next((a for a in self.attributes if a.name == name), None)


@dataclass(frozen=True)
class Model:
    name: str
    entities: tuple[Entity, ...] = ()
    _index: dict = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "_index", {e.name: e for e in self.entities})

    @property
    def entity_names(self) -> list[str]:
        return [e.name for e in self.entities]

    def get_entity_by_class_name(self, name: str) -> Optional[Entity]:
        """Return the entity named `name`, or None."""
        if name is None:
            return None
        return self._index.get(name.strip())
