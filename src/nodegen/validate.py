"""Referential integrity checks for a set of definitions.

Nodes, types and features never validate themselves. Loaders that want
guarantees before handing definitions to a renderer call ``validate``:

    result = validate(definitions)
    if not result.success:
        print(result.format_errors())
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nodegen.nodes import Enum, Struct
from nodegen.types import Item, walk

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from nodegen.definitions import Definitions
    from nodegen.types import Type

logger = logging.getLogger(__name__)

_MAX_AVAILABLE_SHOWN = 5


@dataclass(frozen=True)
class ValidationError:
    """Base class for validation errors.

    ``location`` names where the problem was found, e.g. ``Expr::Binary``.
    """

    location: str
    message: str

    def format(self) -> str:
        """Format the error for display."""
        return f"{self.location}: {self.message}"


@dataclass(frozen=True)
class DuplicateIdentError(ValidationError):
    """An ident is declared more than once in the same scope."""

    ident: str
    count: int

    def format(self) -> str:
        """Format the duplicate ident error for display."""
        return (
            f"{self.location}: Duplicate ident\n"
            f"  Ident: '{self.ident}' declared {self.count} times"
        )


@dataclass(frozen=True)
class UnresolvedItemError(ValidationError):
    """An Item type names no node in the definitions."""

    name: str
    available: tuple[str, ...]

    def format(self) -> str:
        """Format the unresolved item error for display."""
        available_str = ", ".join(self.available[:_MAX_AVAILABLE_SHOWN])
        if len(self.available) > _MAX_AVAILABLE_SHOWN:
            available_str += f" ... ({len(self.available)} total)"
        return (
            f"{self.location}: Unresolved item\n"
            f"  Item:      '{self.name}'\n"
            f"  Available: {available_str}"
        )


@dataclass
class ValidationResult:
    """Result of validating definitions."""

    success: bool
    errors: list[ValidationError] = field(default_factory=list)

    def format_errors(self) -> str:
        """Format all errors for display.

        Returns:
            A multi-line string with all errors formatted.

        """
        if self.success:
            return "Validation passed."

        lines = [f"Validation failed with {len(self.errors)} error(s):\n"]
        for i, error in enumerate(self.errors, 1):
            lines.append(f"[{i}] {error.format()}\n")

        return "\n".join(lines)


def validate(definitions: Definitions) -> ValidationResult:
    """Check ident uniqueness and that every Item names a declared node."""
    idents = tuple(node.ident for node in definitions)
    known = set(idents)
    errors: list[ValidationError] = list(_duplicates("definitions", idents))

    for node in definitions:
        match node:
            case Struct(fields=struct_fields):
                errors.extend(
                    _duplicates(node.ident, (f.ident for f in struct_fields)),
                )
                for f in struct_fields:
                    location = f"{node.ident}.{f.ident}"
                    errors.extend(_unresolved(location, (f.ty,), known, idents))
            case Enum(variants=variants):
                errors.extend(
                    _duplicates(node.ident, (v.ident for v in variants)),
                )
                for v in variants:
                    location = f"{node.ident}::{v.ident}"
                    errors.extend(_unresolved(location, v.fields, known, idents))

    logger.debug(
        "Validated %d node(s): %d error(s)",
        len(definitions),
        len(errors),
    )
    return ValidationResult(success=not errors, errors=errors)


def _duplicates(location: str, idents: Iterable[str]) -> Iterator[ValidationError]:
    for ident, count in Counter(idents).items():
        if count > 1:
            yield DuplicateIdentError(
                location=location,
                message=f"'{ident}' declared {count} times",
                ident=ident,
                count=count,
            )


def _unresolved(
    location: str,
    types: Iterable[Type],
    known: set[str],
    available: tuple[str, ...],
) -> Iterator[ValidationError]:
    for ty in types:
        for nested in walk(ty):
            if isinstance(nested, Item) and nested.name not in known:
                yield UnresolvedItemError(
                    location=location,
                    message=f"'{nested.name}' is not a declared node",
                    name=nested.name,
                    available=available,
                )
