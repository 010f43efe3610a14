"""Declared AST types: structs and enums with their fields and variants."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, dataclass_transform

from nodegen.features import Features

if TYPE_CHECKING:
    from nodegen.types import Type


@dataclass(frozen=True)
class Field:
    """Named struct field. Serialized with ``ty`` under the key ``type``."""

    ident: str
    ty: Type = field(metadata={"key": "type"})


@dataclass(frozen=True)
class Variant:
    """Enum variant with tuple-style payload types. Empty fields = unit variant."""

    ident: str
    fields: tuple[Type, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Node:
    """Base for declared AST types. Every node has an ident and feature gates."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Node]]] = {}

    ident: str
    features: Features = field(hash=False)

    def __post_init__(self) -> None:
        # Each node owns its gates.
        object.__setattr__(self, "features", Features(self.features.flags))

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register node subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.lower()

        if (existing := Node.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Node.registry[cls.tag] = cls


class Struct(Node):
    """Struct with ordered named fields.

    ``all_fields_pub`` marks every field as publicly visible in the
    generated code; visibility is not tracked per field.
    """

    fields: tuple[Field, ...]
    all_fields_pub: bool

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "fields", tuple(self.fields))


class Enum(Node):
    """Enum with ordered variants."""

    variants: tuple[Variant, ...]

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "variants", tuple(self.variants))
