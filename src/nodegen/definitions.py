"""Root container for a single generation run."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from nodegen.codecs import from_builtins, to_builtins
from nodegen.nodes import Node

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@dataclass
class Definitions:
    """Every declared node plus the token spelling table.

    ``types`` keeps declaration order. ``tokens`` maps a raw token spelling
    (``"+="``) to its canonical token type name (``"PlusEq"``); it is written
    out sorted by spelling.
    """

    types: list[Node] = field(default_factory=list)
    tokens: dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.types)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.types)

    def __contains__(self, ident: object) -> bool:
        return any(node.ident == ident for node in self.types)

    def resolve(self, ident: str) -> Node:
        """Look up a node by ident.

        Raises:
            KeyError: If no node has this ident

        """
        for node in self.types:
            if node.ident == ident:
                return node
        available = [node.ident for node in self.types]
        msg = (
            f"Node '{ident}' not found in definitions. "
            f"Available node idents: {available}"
        )
        raise KeyError(msg)

    def add(self, node: Node) -> Node:
        """Add a declaration, consolidating repeats of the same ident.

        The first declaration of an ident is kept; a later one only widens
        or narrows its feature gates through ``Features.join``.

        Returns:
            The node now stored under ``node.ident``

        Raises:
            ValueError: If the ident was declared as a different node kind
            FeatureConflictError: If the feature sets do not nest

        """
        try:
            existing = self.resolve(node.ident)
        except KeyError:
            self.types.append(node)
            return node

        if type(existing) is not type(node):
            msg = (
                f"Node '{node.ident}' declared as both {existing.tag} "
                f"and {node.tag}"
            )
            raise ValueError(msg)

        before = list(existing.features)
        existing.features.join(node.features)
        logger.debug(
            "Consolidated duplicate declaration of %s: features %s + %s -> %s",
            node.ident,
            before,
            list(node.features),
            list(existing.features),
        )
        return existing

    def token(self, spelling: str) -> str:
        """Return the canonical token type name for a raw spelling.

        Raises:
            KeyError: If the spelling is not in the token table

        """
        if spelling not in self.tokens:
            msg = f"Unknown token spelling '{spelling}'"
            raise KeyError(msg)
        return self.tokens[spelling]

    def to_dict(self) -> dict[str, Any]:
        """Serialize definitions to dictionary."""
        return {
            "types": [to_builtins(node) for node in self.types],
            "tokens": dict(sorted(self.tokens.items())),
        }

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize definitions to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Definitions:
        """Deserialize definitions from dictionary.

        Args:
            data: Dictionary containing 'types' and 'tokens' keys

        Returns:
            Deserialized Definitions instance

        Raises:
            KeyError: If required keys ('types' or 'tokens') are missing
            ValueError: If an entry of 'types' is not a node or fails to decode

        """
        if "types" not in data:
            msg = "Missing required key 'types' in definitions data"
            raise KeyError(msg)
        if "tokens" not in data:
            msg = "Missing required key 'tokens' in definitions data"
            raise KeyError(msg)

        types: list[Node] = []
        for item in data["types"]:
            node = from_builtins(item)
            if not isinstance(node, Node):
                msg = f"Expected a node in 'types', got {type(node).__name__}"
                raise ValueError(msg)
            types.append(node)
        return cls(types=types, tokens=dict(data["tokens"]))

    @classmethod
    def from_json(cls, s: str) -> Definitions:
        """Deserialize definitions from JSON string."""
        return cls.from_dict(json.loads(s))
