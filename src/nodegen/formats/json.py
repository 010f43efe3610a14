"""JSON format adapter."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from nodegen.codecs import from_builtins, to_builtins

if TYPE_CHECKING:
    from nodegen.features import Features
    from nodegen.nodes import Field, Node, Variant
    from nodegen.types import Type


def to_json(
    obj: Node | Type | Features | Field | Variant,
    *,
    indent: int | None = 2,
) -> str:
    """Serialize an IR value to a JSON string.

    Args:
        obj: The object to serialize
        indent: JSON indentation level (default 2, None for compact)

    Returns:
        JSON string representation

    """
    return json.dumps(to_builtins(obj), indent=indent)


def from_json(s: str) -> Node | Type:
    """Deserialize a JSON string to a Node or Type.

    Args:
        s: JSON string to deserialize

    Returns:
        Deserialized Node or Type

    Raises:
        ValueError: If the JSON doesn't contain a valid tagged object
        KeyError: If the 'node' discriminator or a required field is missing

    """
    data = json.loads(s)
    if not isinstance(data, dict):
        msg = "Expected JSON object with a 'node' or type tag"
        raise ValueError(msg)
    return from_builtins(data)
