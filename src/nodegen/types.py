"""Type model for node fields and enum variant payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar, dataclass_transform

if TYPE_CHECKING:
    from collections.abc import Iterator


@dataclass(frozen=True)
@dataclass_transform(frozen_default=True)
class Type:
    """Base for field types. Subclasses register under a lower-cased tag."""

    tag: ClassVar[str]
    registry: ClassVar[dict[str, type[Type]]] = {}

    def __init_subclass__(cls, tag: str | None = None) -> None:
        """Register type subclass with automatic tag derivation."""
        dataclass(frozen=True)(cls)
        cls.tag = tag if tag is not None else cls.__name__.lower()

        if (existing := Type.registry.get(cls.tag)) and existing is not cls:
            msg = (
                f"Tag '{cls.tag}' already registered to {existing}. "
                "Choose a different tag."
            )
            raise ValueError(msg)

        Type.registry[cls.tag] = cls


class Item(Type):
    """Node defined in the same definitions: Item("Expr")."""

    name: str


class Std(Type):
    """Standard library type: Std("String")."""

    name: str


class Ext(Type):
    """Type external to both the definitions and the standard library."""

    name: str


class Token(Type):
    """Single lexical token type: Token("Eq")."""

    name: str


class Group(Type):
    """Token delimiter group, e.g. Group("Brace")."""

    name: str


class Punctuated(Type):
    """Separator-interleaved list: Punctuated(element=Item("Expr"), punct="Comma")."""

    element: Type
    punct: str


class Option(Type):
    """Optional value: Option(Item("Expr"))."""

    inner: Type


class Box(Type):
    """Heap-allocated value: Box(Item("Expr"))."""

    inner: Type


class Vec(Type):
    """Growable list: Vec(Item("Attribute"))."""

    inner: Type


class Tuple(Type):
    """Fixed-arity tuple: Tuple((Token("Eq"), Item("Expr")))."""

    elements: tuple[Type, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "elements", tuple(self.elements))


def walk(ty: Type) -> Iterator[Type]:
    """Yield ``ty`` and every type nested inside it, parents first.

    Tuple elements are visited left to right.
    """
    yield ty
    match ty:
        case Punctuated(element=element):
            yield from walk(element)
        case Option(inner=inner) | Box(inner=inner) | Vec(inner=inner):
            yield from walk(inner)
        case Tuple(elements=elements):
            for element in elements:
                yield from walk(element)
