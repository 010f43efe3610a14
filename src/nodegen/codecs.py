"""Conversion between IR objects and JSON-compatible builtins.

Wire shape:

- Nodes are internally tagged: ``{"node": "struct", "ident": ..., ...}``.
- Types are externally tagged by their lower-cased variant name. Single-field
  variants carry their payload directly (``{"item": "Expr"}``,
  ``{"option": {"item": "Expr"}}``, ``{"tuple": [...]}``); ``punctuated``
  carries an object with ``element`` and ``punct``.
- Features serialize as ``{"any": [...]}``.
- Dataclass fields may rename their key via ``metadata={"key": ...}``
  (``Field.ty`` is written as ``type``).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import Field as DataclassField
from dataclasses import fields, is_dataclass
from typing import Any

from nodegen.features import Features
from nodegen.nodes import Field, Node, Variant
from nodegen.types import Type

_NODE_KEY = "node"
_FEATURES_KEY = "any"


def _key(f: DataclassField[Any]) -> str:
    return f.metadata.get("key", f.name)


def to_builtins(obj: Any) -> Any:
    """Convert an IR object tree to JSON-compatible Python builtins.

    Args:
        obj: Node, Type, Field, Variant, Features, or a container of them

    Returns:
        JSON-compatible Python value (dict, list, str, int, float, bool, None)

    """
    # 1. Types: {"<tag>": payload}
    if isinstance(obj, Type):
        type_fields = fields(obj)
        if len(type_fields) == 1:
            payload = to_builtins(getattr(obj, type_fields[0].name))
        else:
            payload = {
                _key(f): to_builtins(getattr(obj, f.name)) for f in type_fields
            }
        return {type(obj).tag: payload}

    # 2. Nodes: discriminator first, then fields in declaration order
    if isinstance(obj, Node):
        result: dict[str, Any] = {_NODE_KEY: type(obj).tag}
        for f in fields(obj):
            result[_key(f)] = to_builtins(getattr(obj, f.name))
        return result

    # 3. Features
    if isinstance(obj, Features):
        return {_FEATURES_KEY: list(obj)}

    # 4. Field, Variant and other plain dataclasses
    if is_dataclass(obj) and not isinstance(obj, type):
        return {_key(f): to_builtins(getattr(obj, f.name)) for f in fields(obj)}

    # 5. Containers
    if isinstance(obj, Mapping):
        return {k: to_builtins(v) for k, v in obj.items()}
    if isinstance(obj, Sequence) and not isinstance(obj, str | bytes):
        return [to_builtins(item) for item in obj]

    # 6. Primitives pass through
    return obj


def from_builtins(data: dict[str, Any]) -> Node | Type:
    """Deserialize a tagged dict to a Node or Type.

    Args:
        data: Dict with a ``node`` discriminator, or a single-key type object

    Returns:
        Deserialized Node or Type

    Raises:
        KeyError: If the dict carries no recognizable discriminator or a
            required field is missing
        ValueError: If a tag is unknown or a type payload is malformed

    """
    if _NODE_KEY in data:
        return _decode_node(data)
    if len(data) == 1 and next(iter(data)) in Type.registry:
        return _decode_type(data)
    msg = f"Missing required '{_NODE_KEY}' field"
    raise KeyError(msg)


def _decode_node(data: dict[str, Any]) -> Node:
    """Deserialize an internally tagged dict to a Node."""
    tag = data[_NODE_KEY]
    node_cls = Node.registry.get(tag)
    if node_cls is None:
        available = list(Node.registry)
        msg = f"Unknown node tag '{tag}'. Available node tags: {available}"
        raise ValueError(msg)

    field_values = {}
    for f in fields(node_cls):
        key = _key(f)
        if key not in data:
            msg = f"Missing required '{key}' field for {tag}"
            raise KeyError(msg)
        decode = _NODE_FIELD_DECODERS.get(f.name)
        field_values[f.name] = decode(data[key]) if decode else data[key]

    return node_cls(**field_values)


def _decode_type(data: Any) -> Type:
    """Deserialize an externally tagged type object."""
    if not isinstance(data, dict) or len(data) != 1:
        msg = f"Expected a single-key type object, got {data!r}"
        raise ValueError(msg)

    ((tag, payload),) = data.items()
    type_cls = Type.registry.get(tag)
    if type_cls is None:
        msg = f"Unknown type tag '{tag}'"
        raise ValueError(msg)

    type_fields = fields(type_cls)
    if len(type_fields) == 1:
        return type_cls(_decode_type_value(tag, type_fields[0], payload))

    if not isinstance(payload, dict):
        msg = f"Expected an object payload for '{tag}', got {payload!r}"
        raise ValueError(msg)
    return type_cls(
        **{
            f.name: _decode_type_value(tag, f, payload[_key(f)]) for f in type_fields
        },
    )


def _decode_type_value(tag: str, f: DataclassField[Any], value: Any) -> Any:
    """Decode one type payload value according to the field's annotation.

    Name fields take a string, child fields a type object and tuple
    elements a list of type objects.
    """
    match f.type:
        case "str" if isinstance(value, str):
            return value
        case "Type" if isinstance(value, dict):
            return _decode_type(value)
        case "tuple[Type, ...]" if isinstance(value, list):
            return tuple(_decode_type(item) for item in value)
    msg = f"Invalid payload for '{tag}.{f.name}' ({f.type}): {value!r}"
    raise ValueError(msg)


def _decode_features(data: dict[str, Any]) -> Features:
    return Features(data[_FEATURES_KEY])


def _decode_field(data: dict[str, Any]) -> Field:
    return Field(ident=data["ident"], ty=_decode_type(data["type"]))


def _decode_variant(data: dict[str, Any]) -> Variant:
    return Variant(
        ident=data["ident"],
        fields=tuple(_decode_type(item) for item in data["fields"]),
    )


_NODE_FIELD_DECODERS: dict[str, Callable[[Any], Any]] = {
    "features": _decode_features,
    "fields": lambda items: tuple(_decode_field(item) for item in items),
    "variants": lambda items: tuple(_decode_variant(item) for item in items),
}
